import dataclasses
from datetime import date, datetime, timedelta, timezone

import pytest

from portfolio_irr.types import CashFlow, Sale, as_amount, as_datetime


def test_cash_flow_is_immutable():
    cf = CashFlow(datetime(2024, 1, 1), -5.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        cf.amount = 10.0


@pytest.mark.parametrize(
    "item",
    [
        (date(2024, 1, 1), -5),
        ("2024-01-01", "-5"),
        {"date": "2024-01-01", "amount": -5},
        {"timestamp": datetime(2024, 1, 1), "amount": "-5.0"},
    ],
)
def test_coerce_variants(item):
    assert CashFlow.coerce(item) == CashFlow(datetime(2024, 1, 1), -5.0)


def test_as_amount_strips_formatting():
    assert as_amount("$1,250.50") == 1250.5
    assert as_amount(None, 0.0) == 0.0
    with pytest.raises(ValueError):
        as_amount("")


def test_as_datetime_rejects_garbage():
    with pytest.raises(ValueError):
        as_datetime(12345)


def test_sale_zero_cost_basis_pct():
    s = Sale("x", datetime(2024, 1, 1), 100.0, 0.0)
    assert s.gain == 100.0
    assert s.gain_pct == 0.0


@pytest.mark.parametrize(
    "value",
    [
        "2024-01-01T05:30:00+05:30",
        datetime(2023, 12, 31, 19, 0, tzinfo=timezone(timedelta(hours=-5))),
        datetime(2024, 1, 1, tzinfo=timezone.utc),
    ],
)
def test_as_datetime_converts_offsets_to_naive_utc(value):
    assert as_datetime(value) == datetime(2024, 1, 1)
    assert as_datetime(value).tzinfo is None


def test_coerce_normalises_aware_cash_flow():
    cf = CashFlow(datetime(2024, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2))), -5.0)
    assert CashFlow.coerce(cf) == CashFlow(datetime(2024, 1, 1), -5.0)
    naive = CashFlow(datetime(2024, 1, 1), -5.0)
    assert CashFlow.coerce(naive) is naive
