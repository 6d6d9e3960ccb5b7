# portfolio_irr/finance/metrics.py
"""
Portfolio summary metrics.

Design:
- IRR/NPV live only in portfolio_irr.finance.irr; nothing here defines them.
- Everything here is plain aggregation over Holding / Sale / Transaction records.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from ..types import Holding, Sale, Transaction


def summary_stats(holdings: Sequence[Holding], sales: Iterable[Sale] = ()) -> Dict[str, Any]:
    total_cost = sum(h.cost_basis for h in holdings)
    total_value = sum(h.current_value for h in holdings)
    unrealized = total_value - total_cost

    proceeds = 0.0
    cost_sold = 0.0
    realized = 0.0
    for s in sales:
        proceeds += s.sale_proceeds
        cost_sold += s.cost_basis_sold
        realized += s.gain

    return {
        "holdings_count": len(holdings),
        "total_cost": total_cost,
        "total_value": total_value,
        "unrealized_gain": unrealized,
        "unrealized_gain_pct": unrealized / total_cost if total_cost > 0 else 0.0,
        "realized_gain": realized,
        "total_sale_proceeds": proceeds,
        "total_cost_basis_sold": cost_sold,
        "total_gain": realized + unrealized,
    }


def category_breakdown(holdings: Sequence[Holding]) -> List[Dict[str, Any]]:
    """Per-category value/cost/gain, largest value first; percentage of total value to 1dp."""
    if not holdings:
        return []
    df = pd.DataFrame(
        {
            "category": [h.category for h in holdings],
            "value": [h.current_value for h in holdings],
            "cost": [h.cost_basis for h in holdings],
        }
    )
    grouped = df.groupby("category", sort=False, as_index=False)[["value", "cost"]].sum()
    grouped = grouped.sort_values("value", ascending=False, kind="stable")

    total = float(grouped["value"].sum())
    rows: List[Dict[str, Any]] = []
    for rec in grouped.itertuples(index=False):
        value, cost = float(rec.value), float(rec.cost)
        rows.append(
            {
                "category": rec.category,
                "value": value,
                "cost": cost,
                "gain_loss": value - cost,
                "percentage": round(value / total * 100.0, 1) if total else 0.0,
            }
        )
    return rows


def top_movers(holdings: Sequence[Holding], n: int = 3) -> Dict[str, List[Dict[str, Any]]]:
    """Best `n` and worst `n` holdings by percentage gain; losers listed worst first."""
    ranked = sorted(holdings, key=lambda h: h.gain_loss_pct, reverse=True)
    gainers = ranked[:n]
    losers = list(reversed(ranked[-n:])) if n > 0 else []
    return {
        "gainers": [h.to_dict() for h in gainers],
        "losers": [h.to_dict() for h in losers],
    }


def transaction_timeline(transactions: Iterable[Transaction], limit: int = 20) -> List[Dict[str, Any]]:
    ordered = sorted(transactions, key=lambda t: t.date, reverse=True)
    return [t.to_dict() for t in ordered[:limit]]


def realized_gains(sales: Iterable[Sale]) -> List[Dict[str, Any]]:
    ordered = sorted(sales, key=lambda s: s.date_sold, reverse=True)
    return [s.to_dict() for s in ordered]


__all__ = [
    "summary_stats",
    "category_breakdown",
    "top_movers",
    "transaction_timeline",
    "realized_gains",
]
