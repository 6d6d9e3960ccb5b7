from portfolio_irr.adapters import display_summary, holdings_rows, run_report
from portfolio_irr.config import Portfolio


def test_run_report_shape(portfolio, as_of):
    res = run_report(portfolio, as_of=as_of)
    for k in ("summary", "display", "holdings", "categories", "movers", "timeline", "realized"):
        assert k in res
    assert res["summary"]["as_of"] == "2024-12-31"
    assert res["summary"]["irr"] is not None
    assert res["display"]["irr"].endswith("%")
    assert res["display"]["total_gain"] == "+$3,300 (16.5%)"
    assert res["display"]["total_gain_all"] == "+$3,700"


def test_run_report_without_transactions_shows_na(as_of):
    p = Portfolio.from_dict({"holdings": [{"name": "Cash", "category": "Cash", "cost_basis": 10, "current_value": 10}]})
    res = run_report(p, as_of=as_of)
    assert res["summary"]["irr"] is None
    assert res["display"]["irr"] == "N/A"


def test_holdings_rows_filter_then_sort(portfolio):
    rows = holdings_rows(portfolio, search="in", sort="name", direction="desc")
    assert [r["id"] for r in rows] == ["vtsax", "btc", "aapl"]


def test_display_summary_negative_gain():
    summary = {
        "holdings_count": 1, "total_cost": 100.0, "total_value": 80.0,
        "unrealized_gain": -20.0, "unrealized_gain_pct": -0.2,
        "realized_gain": 0.0, "total_gain": -20.0, "irr": float("nan"),
    }
    d = display_summary(summary)
    assert d["total_gain"] == "-$20 (-20.0%)"
    assert d["irr"] == "N/A"


def test_display_summary_sign_classes(portfolio, as_of):
    d = run_report(portfolio, as_of=as_of)["display"]
    assert d["total_gain_class"] == "positive"
    assert d["realized_gain_class"] == "positive"
    assert d["total_gain_all_class"] == "positive"
    assert d["irr_class"] == "positive"


def test_display_summary_negative_classes_and_missing_irr():
    summary = {
        "holdings_count": 1, "total_cost": 100.0, "total_value": 80.0,
        "unrealized_gain": -20.0, "unrealized_gain_pct": -0.2,
        "realized_gain": 5.0, "total_gain": -15.0, "irr": -0.2,
    }
    d = display_summary(summary)
    assert d["unrealized_gain_class"] == "negative"
    assert d["realized_gain_class"] == "positive"
    assert d["total_gain_all_class"] == "negative"
    assert d["irr_class"] == "negative"
    assert display_summary(dict(summary, irr=None))["irr_class"] == ""
