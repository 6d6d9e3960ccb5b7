# portfolio_irr/finance/irr.py
"""
Dated-cash-flow IRR (money-weighted return).

    NPV(r) = sum_i CF[i] * (1+r)^(-y[i])      y[i] = (t[i] - t[0]) / 365.25 days

Root finding is two refinement strategies tried in order:
  1) NewtonRaphson  - fast, may wander or stall on a flat tangent
  2) Bisection      - slow, converges whenever [RATE_FLOOR, RATE_CAP] brackets a root

irr() returns a decimal rate (0.12 = 12%) or None when no rate can be estimated.
With several sign changes in the stream there may be several roots; whichever
one the iteration path reaches is returned.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from ..types import CashFlow, TimeAdjustedFlow

log = logging.getLogger(__name__)

DEFAULT_GUESS = 0.10
RATE_FLOOR = -0.99
RATE_CAP = 10.0
SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60  # Julian year

DERIVATIVE_FLOOR = 1e-10
PERTURBATION = 0.01


def _clamp(rate: float) -> float:
    return min(max(rate, RATE_FLOOR), RATE_CAP)


# ---------- Time axis ----------
def time_adjust(cashflows: Iterable[Any]) -> List[TimeAdjustedFlow]:
    """Sort by timestamp and express each flow in years from the earliest one."""
    flows = sorted(
        (CashFlow.coerce(cf) for cf in cashflows),
        key=lambda cf: (cf.timestamp, cf.amount),
    )
    if not flows:
        return []
    epoch = flows[0].timestamp
    return [
        TimeAdjustedFlow((cf.timestamp - epoch).total_seconds() / SECONDS_PER_YEAR, float(cf.amount))
        for cf in flows
    ]


def _arrays(flows: Sequence[TimeAdjustedFlow]) -> Tuple[np.ndarray, np.ndarray]:
    years = np.fromiter((f.years_from_epoch for f in flows), dtype=float, count=len(flows))
    amounts = np.fromiter((f.amount for f in flows), dtype=float, count=len(flows))
    return years, amounts


# ---------- NPV ----------
def npv(rate: float, flows: Sequence[TimeAdjustedFlow]) -> float:
    """Net present value at `rate`, discounted to the earliest flow."""
    years, amounts = _arrays(flows)
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        return float(np.sum(amounts * np.power(1.0 + rate, -years)))


def npv_derivative(rate: float, flows: Sequence[TimeAdjustedFlow]) -> float:
    """d NPV / d rate."""
    years, amounts = _arrays(flows)
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        return float(np.sum(-years * amounts * np.power(1.0 + rate, -years - 1.0)))


# ---------- Refinement strategies ----------
class RootRefiner(Protocol):
    def refine(self, flows: Sequence[TimeAdjustedFlow]) -> Optional[float]:
        ...


@dataclass(frozen=True)
class NewtonRaphson:
    initial_guess: float = DEFAULT_GUESS
    max_iter: int = 100
    tol: float = 1e-7

    def refine(self, flows: Sequence[TimeAdjustedFlow]) -> Optional[float]:
        rate = _clamp(float(self.initial_guess))
        for _ in range(self.max_iter):
            value = npv(rate, flows)
            slope = npv_derivative(rate, flows)
            if not (math.isfinite(value) and math.isfinite(slope)):
                log.debug("newton: non-finite NPV at rate=%r", rate)
                return None

            if abs(slope) < DERIVATIVE_FLOOR:
                # flat tangent: nudge instead of stepping
                rate = _clamp(rate + PERTURBATION)
                continue

            new_rate = rate - value / slope
            if abs(new_rate - rate) < self.tol:
                return _clamp(new_rate)
            rate = _clamp(new_rate)
        return None


@dataclass(frozen=True)
class Bisection:
    low: float = RATE_FLOOR
    high: float = RATE_CAP
    max_iter: int = 100
    tol: float = 1e-6

    def refine(self, flows: Sequence[TimeAdjustedFlow]) -> Optional[float]:
        low, high = float(self.low), float(self.high)
        f_low = npv(low, flows)
        # no sign change across the domain -> nothing to bracket
        if f_low * npv(high, flows) > 0:
            return None

        for _ in range(self.max_iter):
            mid = (low + high) / 2.0
            f_mid = npv(mid, flows)
            if abs(f_mid) < self.tol or (high - low) / 2.0 < self.tol:
                return mid
            if f_low * f_mid < 0:
                high = mid
            else:
                low, f_low = mid, f_mid
        return None


# ---------- IRR ----------
def irr(
    cashflows: Iterable[Any],
    initial_guess: float = DEFAULT_GUESS,
    *,
    strategies: Optional[Sequence[RootRefiner]] = None,
) -> Optional[float]:
    """
    Annualized IRR of dated cash flows.

    `cashflows` items may be CashFlow, (timestamp, amount) pairs or mappings
    with 'date'/'timestamp' and 'amount'. Negative amounts are money put in,
    positive amounts money taken out (or the current value).

    Returns None for fewer than two flows, when no strategy converges, or when
    the result is not a finite number.
    """
    flows = time_adjust(cashflows)
    if len(flows) < 2:
        return None

    if strategies is None:
        strategies = (NewtonRaphson(initial_guess=initial_guess), Bisection())

    for strategy in strategies:
        rate = strategy.refine(flows)
        if rate is not None and math.isfinite(rate):
            return rate
        log.debug("%s found no rate; trying next strategy", type(strategy).__name__)

    log.debug("irr: no rate found for %d flows", len(flows))
    return None


__all__ = [
    "DEFAULT_GUESS",
    "RATE_FLOOR",
    "RATE_CAP",
    "RootRefiner",
    "NewtonRaphson",
    "Bisection",
    "time_adjust",
    "npv",
    "npv_derivative",
    "irr",
]
