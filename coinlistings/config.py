"""Configuration from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    coinmarketcap_api_key: str = ""
    coinmarketcap_base_url: str = "https://pro-api.coinmarketcap.com"
    coinmarketcap_listings_path: str = "/v1/cryptocurrency/listings/latest"
    listings_default_limit: int = Field(default=10, ge=1)
    search_result_limit: int | None = Field(default=None, ge=1)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    quote_currency: str = "USD"

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "extra": "ignore",
    }

    @property
    def effective_search_limit(self) -> int:
        """Search result cap; shares the listings default unless set explicitly."""
        if self.search_result_limit is None:
            return self.listings_default_limit
        return self.search_result_limit


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings for the current process."""
    return Settings()
