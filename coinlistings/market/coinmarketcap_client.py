"""CoinMarketCap listings client with a shared HTTP session."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError

from ..config import get_settings
from ..models import ListingsResponse

logger = logging.getLogger(__name__)

_session: requests.Session | None = None


def _get_session() -> requests.Session:
    global _session
    if _session is None:
        _session = requests.Session()
        _session.headers.update({"Accept": "application/json"})
    return _session


def _listings_url() -> str:
    settings = get_settings()
    return settings.coinmarketcap_base_url.rstrip("/") + settings.coinmarketcap_listings_path


def fetch_listings(limit: int, convert: str = "USD") -> ListingsResponse | None:
    """Fetch the latest listings, at most ``limit`` records quoted in ``convert``.

    Returns None when the endpoint cannot be reached, answers with a non-2xx
    status, or sends a body that is not a valid listings payload.
    """
    settings = get_settings()
    url = _listings_url()

    try:
        resp = _get_session().get(
            url,
            params={"limit": limit, "convert": convert},
            headers={"X-CMC_PRO_API_KEY": settings.coinmarketcap_api_key},
            timeout=settings.request_timeout_seconds,
        )
        resp.raise_for_status()
        return ListingsResponse.model_validate(resp.json())
    except (requests.RequestException, ValidationError) as exc:
        logger.error("Error fetching cryptocurrency data: %s", exc)
        return None


def clear_session() -> None:
    """Close and drop the shared session. Useful for testing."""
    global _session
    if _session is not None:
        _session.close()
    _session = None
