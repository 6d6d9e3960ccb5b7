from datetime import datetime
from pathlib import Path

import pytest
import yaml

from portfolio_irr.config import Portfolio

ROOT = Path(__file__).resolve().parents[1]
SAMPLE = ROOT / "portfolio_irr" / "inputs" / "sample_portfolio.yaml"
AS_OF = datetime(2024, 12, 31)


@pytest.fixture
def sample_path() -> Path:
    return SAMPLE


@pytest.fixture
def sample_dict() -> dict:
    return yaml.safe_load(SAMPLE.read_text(encoding="utf-8"))


@pytest.fixture
def portfolio(sample_dict) -> Portfolio:
    return Portfolio.from_dict(sample_dict)


@pytest.fixture
def as_of() -> datetime:
    return AS_OF
