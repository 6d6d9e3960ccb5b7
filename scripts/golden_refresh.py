"""
Rebuild tests/golden/summary.json from the bundled sample portfolio.

The baseline pins the headline totals, the valuation date they were taken at
and the IRR solved for that date:

    python scripts/golden_refresh.py                 # as_of from the current baseline (or 2024-12-31)
    python scripts/golden_refresh.py --as-of 2025-06-30
    python scripts/golden_refresh.py --check         # compare only, exit 1 on drift
"""
from __future__ import annotations

import argparse
import json
import sys
import tempfile
from datetime import datetime
from pathlib import Path

from portfolio_irr.runner import run_dir

ROOT = Path(__file__).resolve().parents[1]
SAMPLE = ROOT / "portfolio_irr" / "inputs" / "sample_portfolio.yaml"
BASELINE = ROOT / "tests" / "golden" / "summary.json"
DEFAULT_AS_OF = "2024-12-31"
TOTALS = ("holdings_count", "total_cost", "total_value", "realized_gain", "total_gain")
IRR_DIGITS = 9


def _baseline_as_of() -> str:
    if BASELINE.exists():
        return json.loads(BASELINE.read_text(encoding="utf-8")).get("as_of", DEFAULT_AS_OF)
    return DEFAULT_AS_OF


def freeze(as_of: str) -> dict:
    """Solve the sample portfolio at `as_of` and keep only the pinned fields."""
    with tempfile.TemporaryDirectory() as tmp:
        res = run_dir(
            SAMPLE, tmp,
            mode="summary", fmt="text", validation_mode="strict",
            as_of=datetime.fromisoformat(as_of),
        )
    frozen = {k: float(res.summary[k]) for k in TOTALS}
    frozen["as_of"] = res.summary["as_of"]
    irr = res.summary["irr"]
    frozen["irr"] = None if irr is None else round(irr, IRR_DIGITS)
    return frozen


def _diff(old: dict, new: dict) -> list:
    return [f"{k}: {old.get(k)!r} -> {new[k]!r}" for k in new if old.get(k) != new[k]]


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    p.add_argument("--as-of", help="valuation date YYYY-MM-DD")
    p.add_argument("--check", action="store_true", help="do not write; exit 1 if the baseline is stale")
    args = p.parse_args(argv)

    if not SAMPLE.exists():
        print(f"sample portfolio not found: {SAMPLE}", file=sys.stderr)
        return 2

    new = freeze(args.as_of or _baseline_as_of())
    if new["irr"] is None:
        print(f"no IRR for the sample portfolio at {new['as_of']}; refusing to pin it", file=sys.stderr)
        return 3

    old = json.loads(BASELINE.read_text(encoding="utf-8")) if BASELINE.exists() else {}
    changes = _diff(old, new)
    if args.check:
        for line in changes:
            print(line)
        return 1 if changes else 0

    BASELINE.parent.mkdir(parents=True, exist_ok=True)
    BASELINE.write_text(json.dumps(new, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    print(f"{BASELINE.relative_to(ROOT)}: {len(changes)} field(s) changed, irr={new['irr']} as of {new['as_of']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
