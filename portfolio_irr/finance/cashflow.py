# portfolio_irr/finance/cashflow.py
from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from ..types import CashFlow, Holding, Transaction, as_datetime
from .irr import DEFAULT_GUESS, irr


def terminal_value(holdings: Iterable[Holding]) -> float:
    return sum(h.current_value for h in holdings)


def build_cash_flows(
    transactions: Iterable[Transaction],
    holdings: Iterable[Holding] = (),
    as_of: Optional[datetime] = None,
) -> List[CashFlow]:
    """
    Portfolio cash-flow stream for IRR:
      one flow per transaction (signed as recorded)
      + the current value of all holdings as a final inflow at `as_of` (default: now),
        only when that value is positive.
    """
    out: List[CashFlow] = [t.to_cash_flow() for t in transactions]
    total = terminal_value(holdings)
    if total > 0:
        out.append(CashFlow(as_datetime(as_of) if as_of else datetime.now(), total))
    return out


def portfolio_irr(
    transactions: Iterable[Transaction],
    holdings: Iterable[Holding] = (),
    as_of: Optional[datetime] = None,
    initial_guess: float = DEFAULT_GUESS,
) -> Optional[float]:
    return irr(build_cash_flows(transactions, holdings, as_of), initial_guess)
