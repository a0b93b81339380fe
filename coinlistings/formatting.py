"""Text rendering for cached records.

Numbers go through format specs rather than ``locale``, so the decimal
separator is always ``.`` and exactly two fractional digits are shown.
"""

from __future__ import annotations

from .models import CurrencyRecord

UNKNOWN = "unknown"
UNRANKED = "unranked"
MISSING = "n/a"


def format_two_places(value: float | int | None, missing: str = MISSING) -> str:
    """Format a number to exactly two decimal places.

    Examples:
    - 3000 -> "3000.00"
    - -2.5 -> "-2.50"
    - None -> missing
    """
    if value is None:
        return missing
    return f"{float(value):.2f}"


def format_rank(rank: int | None) -> str:
    return f"#{rank}" if rank is not None else UNRANKED


def format_detail(record: CurrencyRecord, currency: str = "USD") -> str:
    """Multi-line rendering with supply figures and the quote block."""
    lines = [
        f"=== {record.name} ({record.symbol}) ===",
        f"Rank: {format_rank(record.rank)}",
        f"Circulating Supply: {format_two_places(record.circulating_supply, UNKNOWN)}",
        f"Total Supply: {format_two_places(record.total_supply, UNKNOWN)}",
        f"Max Supply: {format_two_places(record.max_supply, UNKNOWN)}",
    ]

    quote = record.quote_in(currency)
    if quote is not None:
        lines.extend(
            [
                f"Price ({currency}): ${format_two_places(quote.price)}",
                f"Market Cap ({currency}): ${format_two_places(quote.market_cap)}",
                f"24h Volume: ${format_two_places(quote.volume_24h)}",
                f"24h Change: {format_two_places(quote.percent_change_24h)}%",
                f"7d Change: {format_two_places(quote.percent_change_7d)}%",
            ]
        )

    return "\n".join(lines) + "\n"


def format_summary(record: CurrencyRecord, currency: str = "USD") -> str:
    """One-line rendering: rank, name, symbol and (if quoted) price and 24h change."""
    text = f"{format_rank(record.rank)} {record.name} ({record.symbol})"

    quote = record.quote_in(currency)
    if quote is not None:
        text += (
            f" - ${format_two_places(quote.price)}"
            f" (24h: {format_two_places(quote.percent_change_24h)}%)"
        )

    return text


def format_listing(header: str, records: list[CurrencyRecord], currency: str = "USD") -> str:
    """Header line followed by one summary line per record."""
    return header + "\n" + "".join(format_summary(r, currency) + "\n" for r in records)
