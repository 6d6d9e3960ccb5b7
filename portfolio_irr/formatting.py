# portfolio_irr/formatting.py
"""Display strings: USD without cents, percentages to one decimal."""
from __future__ import annotations

import math
from typing import Optional

NOT_AVAILABLE = "N/A"


def format_currency(value: float) -> str:
    """-1234.6 -> '-$1,235'"""
    sign = "-" if value < 0 and round(abs(value)) != 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_signed_currency(value: float) -> str:
    """Gains/losses: '+$1,000' or '-$250'."""
    return ("+" if value >= 0 else "") + format_currency(value)


def format_percent(value: float) -> str:
    """0.1234 -> '12.3%'"""
    return f"{value * 100:.1f}%"


def format_rate(rate: Optional[float]) -> str:
    """IRR for display; no estimate (None/NaN/inf) shows as 'N/A'."""
    if rate is None or not math.isfinite(rate):
        return NOT_AVAILABLE
    return format_percent(rate)


def gain_class(value: float) -> str:
    return "positive" if value >= 0 else "negative"
