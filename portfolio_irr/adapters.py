# portfolio_irr/adapters.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from .config import Portfolio
from .finance.cashflow import portfolio_irr
from .finance.irr import DEFAULT_GUESS
from .finance.metrics import (
    category_breakdown,
    realized_gains,
    summary_stats,
    top_movers,
    transaction_timeline,
)
from .formatting import (
    NOT_AVAILABLE,
    format_currency,
    format_percent,
    format_rate,
    format_signed_currency,
    gain_class,
)
from .holdings import filter_holdings, sort_holdings


# ------------------------------
# Small helpers (no math here)
# ------------------------------
def display_summary(summary: Dict[str, Any]) -> Dict[str, str]:
    """
    Formatted strings for the headline numbers of a summary.
    Each gain (and the IRR) also gets a '<key>_class' of 'positive'/'negative';
    an unavailable IRR has an empty class.
    """
    irr = summary.get("irr")
    irr_text = format_rate(irr)
    return {
        "holdings_count": str(summary["holdings_count"]),
        "total_cost": format_currency(summary["total_cost"]),
        "total_value": format_currency(summary["total_value"]),
        "total_gain": (
            f"{format_signed_currency(summary['unrealized_gain'])} "
            f"({format_percent(summary['unrealized_gain_pct'])})"
        ),
        "realized_gain": format_signed_currency(summary["realized_gain"]),
        "unrealized_gain": format_signed_currency(summary["unrealized_gain"]),
        "total_gain_all": format_signed_currency(summary["total_gain"]),
        "irr": irr_text,
        "total_gain_class": gain_class(summary["unrealized_gain"]),
        "realized_gain_class": gain_class(summary["realized_gain"]),
        "unrealized_gain_class": gain_class(summary["unrealized_gain"]),
        "total_gain_all_class": gain_class(summary["total_gain"]),
        "irr_class": "" if irr_text == NOT_AVAILABLE else gain_class(irr),
    }


def holdings_rows(
    portfolio: Portfolio,
    *,
    search: str = "",
    category: str = "all",
    sort: Optional[str] = None,
    direction: str = "asc",
) -> List[Dict[str, Any]]:
    rows = filter_holdings(portfolio.holdings, search=search, category=category)
    if sort:
        rows = sort_holdings(rows, sort, direction)
    return [h.to_dict() for h in rows]


# ------------------------------
# Public adapter
# ------------------------------
def run_report(
    portfolio: Portfolio,
    *,
    as_of: Optional[datetime] = None,
    initial_guess: float = DEFAULT_GUESS,
    search: str = "",
    category: str = "all",
    sort: Optional[str] = None,
    direction: str = "asc",
    movers: int = 3,
    timeline_limit: int = 20,
) -> Dict[str, Any]:
    """
    Everything the portfolio page shows, as data:

      {
        'summary':    {... totals, gains, 'irr': float|None, 'as_of': 'YYYY-MM-DD'},
        'display':    {... same headline numbers as strings, IRR 'N/A' when unavailable},
        'holdings':   [holding rows after search/filter/sort],
        'categories': [...], 'movers': {'gainers': [...], 'losers': [...]},
        'timeline':   [...], 'realized': [...],
      }
    """
    as_of = as_of or datetime.now()
    summary = summary_stats(portfolio.holdings, portfolio.sales)
    summary["irr"] = portfolio_irr(portfolio.transactions, portfolio.holdings, as_of, initial_guess)
    summary["as_of"] = as_of.date().isoformat()

    return {
        "summary": summary,
        "display": display_summary(summary),
        "holdings": holdings_rows(portfolio, search=search, category=category, sort=sort, direction=direction),
        "categories": category_breakdown(portfolio.holdings),
        "movers": top_movers(portfolio.holdings, n=movers),
        "timeline": transaction_timeline(portfolio.transactions, limit=timeline_limit),
        "realized": realized_gains(portfolio.sales),
    }
