"""
Drift check for the bundled sample portfolio.

The baseline pins the valuation date with the numbers taken at that date;
refresh it with `python scripts/golden_refresh.py` after an intended change.
"""
from __future__ import annotations

import json
import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path

import pytest

from portfolio_irr.config import load_portfolio
from portfolio_irr.finance.cashflow import build_cash_flows
from portfolio_irr.finance.irr import npv, time_adjust

ROOT = Path(__file__).resolve().parents[2]
SAMPLE = ROOT / "portfolio_irr" / "inputs" / "sample_portfolio.yaml"
BASELINE = ROOT / "tests" / "golden" / "summary.json"
TOTALS = ("holdings_count", "total_cost", "total_value", "realized_gain", "total_gain")


@pytest.fixture(scope="module")
def baseline():
    assert BASELINE.exists(), "run scripts/golden_refresh.py and commit tests/golden/summary.json"
    return json.loads(BASELINE.read_text(encoding="utf-8"))


@pytest.fixture(scope="module")
def cli_summary(baseline, tmp_path_factory):
    out = tmp_path_factory.mktemp("golden")
    env = dict(os.environ, VALIDATION_MODE="strict")
    subprocess.run(
        [sys.executable, "-m", "portfolio_irr", "--mode", "summary", "--config", str(SAMPLE),
         "--outputs-dir", str(out), "--format", "csv", "--as-of", baseline["as_of"]],
        check=True, env=env, cwd=ROOT,
    )
    assert list(out.glob("*_summary_results_*.csv"))
    return json.loads((out / "summary.json").read_text(encoding="utf-8"))


def test_totals_match_baseline(baseline, cli_summary):
    for k in TOTALS:
        assert float(cli_summary[k]) == pytest.approx(baseline[k], abs=1e-9), k


def test_irr_is_pinned_to_its_valuation_date(baseline, cli_summary):
    assert cli_summary["as_of"] == baseline["as_of"]
    assert cli_summary["irr"] == pytest.approx(baseline["irr"], abs=1e-8)


def test_pinned_irr_zeroes_sample_npv(baseline):
    p = load_portfolio(SAMPLE)
    flows = build_cash_flows(p.transactions, p.holdings, datetime.fromisoformat(baseline["as_of"]))
    assert abs(npv(baseline["irr"], time_adjust(flows))) < 1e-3
