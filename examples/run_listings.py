"""Example: refresh the listings cache from CoinMarketCap and run each query."""

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from coinlistings import ListingsCache  # noqa: E402


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")

    cache = ListingsCache.from_settings()
    outcome = cache.refresh(limit=50)
    print(outcome)
    if not outcome.ok:
        return 1

    print(cache.describe_count())
    print(cache.top_by_rank(5))
    print(cache.find_by_symbol("eth"))
    print(cache.search_by_name("coin"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
