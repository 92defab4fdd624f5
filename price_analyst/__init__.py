"""Price Analyst: deterministic price-target analysis of daily OHLCV series."""

from price_analyst.analysis.engine import PriceAnalyzer, analyze
from price_analyst.errors import NoDataAvailable, PriceAnalystError
from price_analyst.models import AnalysisRecord, AnalystConsensus, PriceBar, QuoteSnapshot

__version__ = "1.0.0"
