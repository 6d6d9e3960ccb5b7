# portfolio_irr/runner.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional
from datetime import datetime
import csv
import json
import logging

from .adapters import run_report
from .config import Portfolio, load_portfolio_dict
from .finance.irr import DEFAULT_GUESS
from .validate import mode_from_env_or_flag, validate_portfolio_dict

log = logging.getLogger(__name__)

MODES = ("summary", "holdings", "categories", "movers", "timeline", "realized")
FORMATS = ("csv", "jsonl", "text")

@dataclass
class RunResult:
    summary: Dict[str, Any]
    summary_path: Path
    results_path: Optional[Path] = None
    report: Optional[Dict[str, Any]] = None

def _write_jsonl(path: Path, rows: List[Dict[str, Any]]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=False) + "\n")

def _write_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    if not rows:
        path.write_text("", encoding="utf-8")
        return
    cols: List[str] = []
    for row in rows:
        for k in row.keys():
            if k not in cols:
                cols.append(k)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=cols)
        w.writeheader()
        for row in rows:
            w.writerow({k: row.get(k, "") for k in cols})

def rows_for_mode(report: Dict[str, Any], mode: str) -> List[Dict[str, Any]]:
    if mode == "summary":
        return [dict(report["summary"])]
    if mode == "movers":
        movers = report["movers"]
        return [dict(r, side="gainer") for r in movers["gainers"]] + [dict(r, side="loser") for r in movers["losers"]]
    if mode in ("holdings", "categories", "timeline", "realized"):
        return list(report[mode])
    raise SystemExit(f"unknown mode: {mode}")

def run_dir(
    config: str | Path,
    out_dir: str | Path,
    *,
    mode: str = "summary",
    fmt: str = "csv",
    validation_mode: Optional[str] = None,
    as_of: Optional[datetime] = None,
    initial_guess: float = DEFAULT_GUESS,
    **report_kwargs: Any,
) -> RunResult:
    """
    Load -> validate -> report -> write.

    Always writes <out_dir>/summary.json. For fmt csv/jsonl also writes the rows of
    `mode` to <stem>_<mode>_<stamp>.<ext>. A directory `config` is validated file by
    file (nothing is reported).
    """
    if mode not in MODES:
        raise SystemExit(f"unknown mode: {mode}")
    if fmt not in FORMATS:
        raise SystemExit(f"unknown fmt: {fmt}")

    cfg_path = Path(config)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    vmode = mode_from_env_or_flag(validation_mode)

    # Directory mode: validate each portfolio file; raise on violations.
    if cfg_path.is_dir():
        seen = 0
        for f in sorted(cfg_path.glob("*")):
            if not f.is_file() or f.suffix.lower() not in (".yaml", ".yml", ".json", ".html", ".htm"):
                continue
            seen += 1
            data = load_portfolio_dict(f)
            try:
                validate_portfolio_dict(data, mode=vmode)
            except SystemExit as e:
                raise SystemExit(f"{f}: {e}")
        if not seen:
            raise SystemExit(f"{cfg_path}: no portfolio files found")
        summary = {"validated": seen}
        summary_path = out / "summary.json"
        summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")
        return RunResult(summary=summary, summary_path=summary_path)

    data = load_portfolio_dict(cfg_path)
    validate_portfolio_dict(data, mode=vmode)
    report = run_report(Portfolio.from_dict(data), as_of=as_of, initial_guess=initial_guess, **report_kwargs)

    summary = dict(report["summary"], display=report["display"])
    summary_path = out / "summary.json"
    summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")
    log.info("wrote %s", summary_path)

    results_path: Optional[Path] = None
    if fmt in ("csv", "jsonl"):
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        results_path = out / f"{cfg_path.stem}_{mode}_results_{stamp}.{fmt}"
        rows = rows_for_mode(report, mode)
        if fmt == "jsonl":
            _write_jsonl(results_path, rows)
        else:
            _write_csv(results_path, rows)
        log.info("wrote %d %s rows to %s", len(rows), mode, results_path)

    return RunResult(summary=summary, summary_path=summary_path, results_path=results_path, report=report)
