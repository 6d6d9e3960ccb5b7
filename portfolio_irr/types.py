# portfolio_irr/types.py
"""
Plain records shared across the package.

CashFlow / TimeAdjustedFlow feed the IRR solver; Holding / Transaction / Sale
mirror the JSON blocks embedded in the portfolio page.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping


def as_datetime(value: Any) -> datetime:
    """
    Naive datetime for any date-like value.
    date -> midnight; ISO strings parsed; offset-aware values -> naive UTC
    so every flow sits on one comparable time axis.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise ValueError(f"cannot interpret {value!r} as a date")


def as_amount(value: Any, default: float | None = None) -> float:
    """Float conversion for amounts that may arrive as strings ('1,250.00')."""
    if value is None or value == "":
        if default is None:
            raise ValueError("missing amount")
        return default
    if isinstance(value, str):
        value = value.replace(",", "").replace("$", "").strip()
    return float(value)


@dataclass(frozen=True)
class CashFlow:
    timestamp: datetime
    amount: float

    @classmethod
    def coerce(cls, item: Any) -> "CashFlow":
        if isinstance(item, CashFlow):
            if item.timestamp.tzinfo is None:
                return item
            return cls(as_datetime(item.timestamp), item.amount)
        if isinstance(item, Mapping):
            ts = item.get("timestamp", item.get("date"))
            return cls(as_datetime(ts), as_amount(item.get("amount")))
        ts, amount = item
        return cls(as_datetime(ts), as_amount(amount))


@dataclass(frozen=True)
class TimeAdjustedFlow:
    years_from_epoch: float
    amount: float


@dataclass(frozen=True)
class Holding:
    name: str
    category: str
    cost_basis: float
    current_value: float
    id: str = ""
    notes: str = ""

    @property
    def gain_loss(self) -> float:
        return self.current_value - self.cost_basis

    @property
    def gain_loss_pct(self) -> float:
        return self.gain_loss / self.cost_basis if self.cost_basis > 0 else 0.0

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Holding":
        return cls(
            name=str(d.get("name", "")),
            category=str(d.get("category", "")),
            cost_basis=as_amount(d.get("cost_basis"), 0.0),
            current_value=as_amount(d.get("current_value"), 0.0),
            id=str(d.get("id", "") or ""),
            notes=str(d.get("notes", "") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "cost_basis": self.cost_basis,
            "current_value": self.current_value,
            "gain_loss": self.gain_loss,
            "gain_loss_pct": self.gain_loss_pct,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class Transaction:
    date: datetime
    amount: float
    type: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Transaction":
        return cls(
            date=as_datetime(d.get("date")),
            amount=as_amount(d.get("amount")),
            type=str(d.get("type", "") or ""),
            description=str(d.get("description", "") or ""),
        )

    def to_cash_flow(self) -> CashFlow:
        return CashFlow(self.date, self.amount)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.date().isoformat(),
            "type": self.type,
            "description": self.description,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class Sale:
    holding_id: str
    date_sold: datetime
    sale_proceeds: float
    cost_basis_sold: float
    notes: str = ""

    @property
    def gain(self) -> float:
        return self.sale_proceeds - self.cost_basis_sold

    @property
    def gain_pct(self) -> float:
        return self.gain / self.cost_basis_sold if self.cost_basis_sold > 0 else 0.0

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Sale":
        return cls(
            holding_id=str(d.get("holding_id", "")),
            date_sold=as_datetime(d.get("date_sold")),
            sale_proceeds=as_amount(d.get("sale_proceeds"), 0.0),
            cost_basis_sold=as_amount(d.get("cost_basis_sold"), 0.0),
            notes=str(d.get("notes", "") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "holding_id": self.holding_id,
            "date_sold": self.date_sold.date().isoformat(),
            "sale_proceeds": self.sale_proceeds,
            "cost_basis_sold": self.cost_basis_sold,
            "gain": self.gain,
            "gain_pct": self.gain_pct,
            "notes": self.notes,
        }
