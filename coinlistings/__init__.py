"""Coinlistings: an in-memory snapshot of cryptocurrency listings with read queries."""

from .cache import ListingsCache
from .models import CurrencyRecord, ListingsResponse, Outcome, OutcomeStatus, PriceQuote, Snapshot

__all__ = [
    "ListingsCache",
    "CurrencyRecord",
    "ListingsResponse",
    "Outcome",
    "OutcomeStatus",
    "PriceQuote",
    "Snapshot",
]
