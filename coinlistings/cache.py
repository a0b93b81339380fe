"""In-process snapshot cache over the listings endpoint, with read queries.

The cache holds exactly one immutable Snapshot. ``refresh`` calls the fetch
collaborator without holding any lock and installs the new Snapshot with a
single reference swap, so readers always see either the old or the new
snapshot in full. Queries read the reference once and work on that object.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime

from .config import Settings, get_settings
from .formatting import format_detail, format_listing
from .models import CurrencyRecord, ListingsResponse, Outcome, OutcomeStatus, Snapshot

FetchListings = Callable[[int, str], ListingsResponse | None]

_EMPTY = Snapshot()


def _rank_key(record: CurrencyRecord) -> tuple[int, int]:
    """Sort key placing unranked records after every ranked one."""
    if record.rank is None:
        return (1, 0)
    return (0, record.rank)


class ListingsCache:
    """Snapshot cache and query service for cryptocurrency listings."""

    def __init__(
        self,
        fetch: FetchListings,
        default_limit: int,
        *,
        search_limit: int | None = None,
        quote_currency: str = "USD",
        logger: logging.Logger | None = None,
    ) -> None:
        if default_limit <= 0:
            raise ValueError("default_limit must be a positive integer")
        if search_limit is not None and search_limit <= 0:
            raise ValueError("search_limit must be a positive integer")

        self._fetch = fetch
        self.default_limit = default_limit
        self.search_limit = search_limit if search_limit is not None else default_limit
        self.quote_currency = quote_currency
        self._log = logger or logging.getLogger(__name__)
        self._snapshot = _EMPTY
        self._swap_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> ListingsCache:
        """Build a cache wired to the CoinMarketCap client and runtime settings."""
        from .market.coinmarketcap_client import fetch_listings

        settings = settings or get_settings()
        return cls(
            fetch_listings,
            settings.listings_default_limit,
            search_limit=settings.effective_search_limit,
            quote_currency=settings.quote_currency,
            logger=logger,
        )

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def last_refreshed(self) -> datetime | None:
        return self._snapshot.fetched_at

    def _resolve_limit(self, value: int | None) -> int:
        if value is None or value <= 0:
            return self.default_limit
        return value

    # Refresh

    def refresh(self, limit: int | None = None) -> Outcome:
        """Fetch listings upstream and replace the snapshot on success."""
        limit = self._resolve_limit(limit)
        self._log.info("Fetching latest cryptocurrency listings with limit: %s", limit)
        try:
            response = self._fetch(limit, self.quote_currency)
        except Exception as e:
            return self._fault(e)
        return self._install(response, limit)

    async def arefresh(self, limit: int | None = None) -> Outcome:
        """Async refresh: the blocking fetch runs in a worker thread."""
        limit = self._resolve_limit(limit)
        self._log.info("Fetching latest cryptocurrency listings with limit: %s", limit)
        try:
            response = await asyncio.to_thread(self._fetch, limit, self.quote_currency)
        except Exception as e:
            return self._fault(e)
        return self._install(response, limit)

    def _fault(self, exc: Exception) -> Outcome:
        self._log.error("Exception while refreshing listings: %s", exc, exc_info=exc)
        return Outcome(status=OutcomeStatus.FAULT, message=f"Error: {exc}")

    def _install(self, response: ListingsResponse | None, limit: int) -> Outcome:
        if response is None or response.data is None:
            self._log.warning("Listings fetch returned no usable data; keeping current snapshot")
            return Outcome(
                status=OutcomeStatus.FETCH_FAILURE,
                message="Failed to fetch cryptocurrency data. Please check your configuration.",
            )

        new = Snapshot(
            records=tuple(response.data),
            fetched_at=datetime.now(UTC),
            requested_limit=limit,
        )
        with self._swap_lock:
            self._snapshot = new

        n = len(new)
        self._log.info("Successfully fetched and cached %d cryptocurrencies", n)
        return Outcome(
            status=OutcomeStatus.OK,
            message=f"Successfully fetched {n} cryptocurrencies. Total in cache: {n}",
            count=n,
        )

    # Queries

    def count(self) -> int:
        return len(self._snapshot)

    def describe_count(self) -> Outcome:
        n = self.count()
        self._log.info("Current cached cryptocurrency count: %d", n)
        return Outcome(
            status=OutcomeStatus.OK,
            message=f"Currently caching {n} cryptocurrencies",
            count=n,
        )

    def find_by_symbol(self, symbol: str | None) -> Outcome:
        """Look up a record by ticker, case-insensitive. First match wins."""
        self._log.info("Searching for cryptocurrency with symbol: %s", symbol)
        if symbol is None or not symbol.strip():
            return Outcome(
                status=OutcomeStatus.INVALID_INPUT,
                message="Please provide a valid cryptocurrency symbol",
            )

        wanted = symbol.strip().casefold()
        for record in self._snapshot.records:
            if record.symbol.casefold() == wanted:
                return Outcome(
                    status=OutcomeStatus.OK,
                    message=format_detail(record, self.quote_currency),
                    count=1,
                    records=(record,),
                )

        return Outcome(
            status=OutcomeStatus.NOT_FOUND,
            message=f"Cryptocurrency with symbol '{symbol}' not found in cache",
        )

    def top_by_rank(self, count: int | None = None) -> Outcome:
        """Return the ``count`` best-ranked records; unranked ones sort last."""
        count = self._resolve_limit(count)
        self._log.info("Getting top %d cryptocurrencies", count)

        snapshot = self._snapshot
        if snapshot.is_empty:
            return Outcome(
                status=OutcomeStatus.EMPTY_CACHE,
                message="No cryptocurrencies in cache. Please fetch data first using refresh.",
            )

        # sorted() is stable, so ties and unranked records keep snapshot order
        top = sorted(snapshot.records, key=_rank_key)[:count]
        return Outcome(
            status=OutcomeStatus.OK,
            message=format_listing(f"Top {len(top)} Cryptocurrencies:", top, self.quote_currency),
            count=len(top),
            records=tuple(top),
        )

    def search_by_name(self, name: str | None) -> Outcome:
        """Case-insensitive substring search over names, in snapshot order."""
        self._log.info("Searching for cryptocurrencies with name containing: %s", name)
        if name is None or not name.strip():
            return Outcome(
                status=OutcomeStatus.INVALID_INPUT,
                message="Please provide a valid cryptocurrency name to search",
            )

        needle = name.strip().casefold()
        matches: list[CurrencyRecord] = []
        for record in self._snapshot.records:
            if needle in record.name.casefold():
                matches.append(record)
                if len(matches) >= self.search_limit:
                    break

        if not matches:
            return Outcome(
                status=OutcomeStatus.NOT_FOUND,
                message=f"No cryptocurrencies found matching '{name}'",
            )

        header = f"Found {len(matches)} cryptocurrency(ies) matching '{name}':"
        return Outcome(
            status=OutcomeStatus.OK,
            message=format_listing(header, matches, self.quote_currency),
            count=len(matches),
            records=tuple(matches),
        )
