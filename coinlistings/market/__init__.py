"""Upstream market data layer (CoinMarketCap)."""

from .coinmarketcap_client import fetch_listings

__all__ = ["fetch_listings"]
