"""Portfolio summaries and dated-cash-flow IRR."""
from .finance.irr import irr
from .types import CashFlow

__version__ = "1.0.0"

__all__ = ["irr", "CashFlow", "__version__"]
