"""Core data models for cached market listings.

Upstream records parse straight from the listings JSON payload (snake_case
keys, ``cmc_rank`` for rank). All models are frozen: once a record is part of
a Snapshot it is never mutated, and a refresh installs a new Snapshot rather
than editing the old one.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class PriceQuote(BaseModel):
    """Price and derived metrics for one asset in one quote currency."""

    price: float | None = None
    volume_24h: float | None = None
    volume_change_24h: float | None = None
    percent_change_1h: float | None = None
    percent_change_24h: float | None = None
    percent_change_7d: float | None = None
    percent_change_30d: float | None = None
    percent_change_60d: float | None = None
    percent_change_90d: float | None = None
    market_cap: float | None = None
    market_cap_dominance: float | None = None
    fully_diluted_market_cap: float | None = None
    last_updated: datetime | None = None

    model_config = {"frozen": True, "extra": "ignore"}


class CurrencyRecord(BaseModel):
    """One tracked asset as returned by the listings endpoint."""

    id: int | None = None
    name: str = Field(min_length=1)
    symbol: str
    slug: str | None = None
    rank: int | None = Field(default=None, ge=1, alias="cmc_rank")  # None = unranked
    num_market_pairs: int | None = None
    date_added: datetime | None = None
    tags: tuple[str, ...] = ()
    circulating_supply: float | None = Field(default=None, ge=0)
    total_supply: float | None = Field(default=None, ge=0)
    max_supply: float | None = Field(default=None, ge=0)  # None = uncapped
    last_updated: datetime | None = None
    quote: Mapping[str, PriceQuote] = Field(default_factory=dict, validate_default=True)

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    @field_validator("quote", "tags", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return {} if info.field_name == "quote" else ()
        return value

    @field_validator("quote")
    @classmethod
    def _freeze_quote(cls, value: Mapping[str, PriceQuote]) -> Mapping[str, PriceQuote]:
        # frozen=True does not reach container contents
        return MappingProxyType(dict(value))

    def quote_in(self, currency: str) -> PriceQuote | None:
        return self.quote.get(currency)


class ResponseStatus(BaseModel):
    """Status block of a listings response. Carried, not interpreted."""

    timestamp: datetime | None = None
    error_code: int | None = None
    error_message: str | None = None
    elapsed: int | None = None
    credit_count: int | None = None
    notice: str | None = None

    model_config = {"frozen": True, "extra": "ignore"}


class ListingsResponse(BaseModel):
    """Full listings payload. ``data=None`` means no usable records."""

    status: ResponseStatus | None = None
    data: list[CurrencyRecord] | None = None

    model_config = {"extra": "ignore"}


class Snapshot(BaseModel):
    """The records held as of the last successful refresh."""

    records: tuple[CurrencyRecord, ...] = ()
    fetched_at: datetime | None = None
    requested_limit: int | None = None

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records


class OutcomeStatus(StrEnum):
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    EMPTY_CACHE = "empty_cache"
    FETCH_FAILURE = "fetch_failure"
    FAULT = "fault"


class Outcome(BaseModel):
    """Result of a cache operation: a classification plus a readable message."""

    status: OutcomeStatus
    message: str
    count: int = 0
    records: tuple[CurrencyRecord, ...] = ()

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    def __str__(self) -> str:
        return self.message
