# portfolio_irr/holdings.py
"""
Holdings table: free-text search, category filter and column sort.

Search matches name, category or notes (case-insensitive substring).
Sort decides pair by pair: two cells that both start with a number ('12', '9px',
'-3.5e2') compare by that number, any other pair compares as case-insensitive
text. Missing values behave like ''. Ties keep their input order.
"""
from __future__ import annotations

import math
import re
from functools import cmp_to_key
from typing import Any, List, Optional, Sequence

import pandas as pd

from .types import Holding

COLUMNS = ["id", "name", "category", "cost_basis", "current_value", "gain_loss", "gain_loss_pct", "notes"]


def holdings_frame(holdings: Sequence[Holding]) -> pd.DataFrame:
    return pd.DataFrame([h.to_dict() for h in holdings], columns=COLUMNS)


def _to_holdings(df: pd.DataFrame, holdings: Sequence[Holding]) -> List[Holding]:
    return [holdings[i] for i in df.index]


def filter_holdings(holdings: Sequence[Holding], search: str = "", category: str = "all") -> List[Holding]:
    df = holdings_frame(holdings)
    if df.empty:
        return []

    mask = pd.Series(True, index=df.index)
    term = (search or "").strip().lower()
    if term:
        hit = pd.Series(False, index=df.index)
        for col in ("name", "category", "notes"):
            hit |= df[col].fillna("").str.lower().str.contains(term, regex=False)
        mask &= hit
    if category and category != "all":
        mask &= df["category"] == category
    return _to_holdings(df[mask], holdings)


_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _cell_text(value: Any) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


def _leading_number(value: Any) -> Optional[float]:
    """Number at the start of a cell ('10px' -> 10.0); None when there is none."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return None if math.isnan(value) else float(value)
    m = _LEADING_NUMBER.match(_cell_text(value))
    return float(m.group().replace("Infinity", "inf")) if m else None


def _compare_cells(a: Any, b: Any) -> int:
    an, bn = _leading_number(a), _leading_number(b)
    if an is not None and bn is not None:
        return (an > bn) - (an < bn)
    at, bt = _cell_text(a).casefold(), _cell_text(b).casefold()
    return (at > bt) - (at < bt)


def sort_holdings(holdings: Sequence[Holding], column: str, direction: str = "asc") -> List[Holding]:
    if direction not in ("asc", "desc"):
        raise ValueError(f"direction must be 'asc' or 'desc', got {direction!r}")
    df = holdings_frame(holdings)
    if df.empty:
        return []
    if column not in df.columns:
        raise ValueError(f"unknown holdings column: {column!r} (expected one of {COLUMNS})")
    sign = 1 if direction == "asc" else -1
    cells = df[column]
    order = sorted(df.index, key=cmp_to_key(lambda i, j: sign * _compare_cells(cells[i], cells[j])))
    return _to_holdings(df.loc[order], holdings)


__all__ = ["COLUMNS", "holdings_frame", "filter_holdings", "sort_holdings"]
