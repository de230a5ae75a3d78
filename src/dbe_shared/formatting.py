"""
formatting.py — Display formatters for report cells.

The engine never formats; these are used only when projecting contracts into
export rows.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal


def format_currency(amount: Decimal | float | int | None) -> str:
    """$1,234.56 style, negative values as -$1,234.56."""
    if amount is None:
        return ""
    value = Decimal(str(amount)).quantize(Decimal("0.01"))
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percentage(value: Decimal | float | int | None) -> str:
    """Stored percentage with a trailing %, e.g. 12.5 → "12.5%", 10 → "10%"."""
    if value is None:
        return ""
    return f"{Decimal(str(value)).normalize():f}%"


def format_date(value: date | None) -> str:
    """US style MM/DD/YYYY."""
    if value is None:
        return ""
    return value.strftime("%m/%d/%Y")
