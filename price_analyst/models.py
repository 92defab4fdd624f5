"""Data classes shared by the analysis engine.

Input bars and quotes are plain dataclasses.  Every output record is frozen,
holds its sequences as tuples, and exposes ``to_dict()`` returning fresh
JSON-serialisable copies.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


def _opt_list(values: Optional[Tuple[Any, ...]]) -> Optional[List[Any]]:
    if values is None:
        return None
    return [v.to_dict() if hasattr(v, "to_dict") else v for v in values]


def _freeze(obj, name: str) -> None:
    # frozen only blocks attribute assignment; stored sequences become tuples
    values = getattr(obj, name)
    if values is not None and not isinstance(values, tuple):
        object.__setattr__(obj, name, tuple(values))


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------
@dataclass
class PriceBar:
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass
class QuoteSnapshot:
    """Latest quote from the price provider."""

    price: float
    previous_close: Optional[float] = None
    volume: float = 0.0

    @property
    def change(self) -> float:
        if self.previous_close is None:
            return 0.0
        return self.price - self.previous_close

    @property
    def change_percent(self) -> float:
        if not self.previous_close:
            return 0.0
        return self.change / self.previous_close * 100


@dataclass(frozen=True)
class AnalystConsensus:
    """Analyst targets merged into the record as-is (never validated)."""

    target_mean_price: Optional[float] = None
    target_median_price: Optional[float] = None
    target_high_price: Optional[float] = None
    target_low_price: Optional[float] = None
    recommendation_key: Optional[str] = None
    recommendation_mean: Optional[float] = None
    number_of_analyst_opinions: Optional[int] = None

    # provider (camelCase) key -> field name
    _ALIASES = {
        "targetMeanPrice": "target_mean_price",
        "targetMedianPrice": "target_median_price",
        "targetHighPrice": "target_high_price",
        "targetLowPrice": "target_low_price",
        "recommendationKey": "recommendation_key",
        "recommendationMean": "recommendation_mean",
        "numberOfAnalystOpinions": "number_of_analyst_opinions",
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["AnalystConsensus"]:
        """Build from a provider payload; unknown keys are ignored."""
        if data is None:
            return None
        fields = set(cls._ALIASES.values())
        kwargs = {}
        for key, value in data.items():
            name = cls._ALIASES.get(key, key)
            if name in fields:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {
            "analyst_target_price": self.target_mean_price,
            "analyst_target_price_median": self.target_median_price,
            "analyst_target_price_high": self.target_high_price,
            "analyst_target_price_low": self.target_low_price,
            "analyst_recommendation_key": self.recommendation_key,
            "analyst_recommendation_mean": self.recommendation_mean,
            "number_of_analyst_opinions": self.number_of_analyst_opinions,
        }


# ---------------------------------------------------------------------------
# Indicators
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MacdPoint:
    macd_line: float
    signal_line: Optional[float] = None   # None during the signal warm-up
    histogram: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "macd_line": self.macd_line,
            "signal_line": self.signal_line,
            "histogram": self.histogram,
        }


@dataclass(frozen=True)
class BollingerPoint:
    upper_band: float
    middle_band: float
    lower_band: float
    percent_b: float

    def to_dict(self) -> dict:
        return {
            "upper_band": self.upper_band,
            "middle_band": self.middle_band,
            "lower_band": self.lower_band,
            "percent_b": self.percent_b,
        }


@dataclass(frozen=True)
class IndicatorSet:
    sma20: Optional[Tuple[float, ...]] = None
    sma50: Optional[Tuple[float, ...]] = None
    sma200: Optional[Tuple[float, ...]] = None
    ema12: Optional[Tuple[float, ...]] = None
    ema26: Optional[Tuple[float, ...]] = None
    rsi: Optional[Tuple[float, ...]] = None
    macd: Optional[Tuple[MacdPoint, ...]] = None
    bollinger: Optional[Tuple[BollingerPoint, ...]] = None
    adx: Optional[Tuple[float, ...]] = None

    def __post_init__(self):
        for f in fields(self):
            _freeze(self, f.name)

    @property
    def latest_rsi(self) -> Optional[float]:
        return self.rsi[-1] if self.rsi else None

    @property
    def latest_bollinger(self) -> Optional[BollingerPoint]:
        return self.bollinger[-1] if self.bollinger else None

    def to_dict(self) -> dict:
        return {
            "sma20": _opt_list(self.sma20),
            "sma50": _opt_list(self.sma50),
            "sma200": _opt_list(self.sma200),
            "ema12": _opt_list(self.ema12),
            "ema26": _opt_list(self.ema26),
            "rsi": _opt_list(self.rsi),
            "macd": _opt_list(self.macd),
            "bollinger": _opt_list(self.bollinger),
            "adx": _opt_list(self.adx),
        }


# ---------------------------------------------------------------------------
# Levels
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class FibonacciLevels:
    high: float
    low: float
    levels: Mapping[str, float]

    def __post_init__(self):
        object.__setattr__(self, "levels", MappingProxyType(dict(self.levels)))

    def to_dict(self) -> dict:
        return {"high": self.high, "low": self.low, "levels": dict(self.levels)}


@dataclass(frozen=True)
class PriceLevel:
    price: float
    touch_count: int
    index: int

    def to_dict(self) -> dict:
        return {"price": self.price, "touch_count": self.touch_count, "index": self.index}


@dataclass(frozen=True)
class SupportResistance:
    support: Tuple[PriceLevel, ...] = ()
    resistance: Tuple[PriceLevel, ...] = ()

    def __post_init__(self):
        _freeze(self, "support")
        _freeze(self, "resistance")

    def to_dict(self) -> dict:
        return {
            "support": [lvl.to_dict() for lvl in self.support],
            "resistance": [lvl.to_dict() for lvl in self.resistance],
        }


# ---------------------------------------------------------------------------
# Trend / volatility
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MovingAverages:
    short: float
    medium: float
    long: float

    def to_dict(self) -> dict:
        return {"short": self.short, "medium": self.medium, "long": self.long}


@dataclass(frozen=True)
class TrendState:
    trend: str = "neutral"   # strong_uptrend / uptrend / neutral / downtrend / strong_downtrend
    moving_averages: Optional[MovingAverages] = None

    @property
    def is_uptrend(self) -> bool:
        return "uptrend" in self.trend

    @property
    def is_downtrend(self) -> bool:
        return "downtrend" in self.trend

    def to_dict(self) -> dict:
        return {
            "trend": self.trend,
            "moving_averages": self.moving_averages.to_dict() if self.moving_averages else None,
        }


@dataclass(frozen=True)
class VolatilityState:
    standard_deviation: float = 0.0
    annualized_volatility: float = 0.0
    current_level: str = "low"   # low / medium / high

    def to_dict(self) -> dict:
        return {
            "standard_deviation": self.standard_deviation,
            "annualized_volatility": self.annualized_volatility,
            "current_level": self.current_level,
        }


# ---------------------------------------------------------------------------
# Target / confidence / recommendation
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TargetComponent:
    price: float
    weight: float
    source: str

    def to_dict(self) -> dict:
        return {"price": self.price, "weight": self.weight, "source": self.source}


@dataclass(frozen=True)
class PriceTarget:
    price: float
    method: str              # weighted_average / current_price
    range_low: float
    range_high: float
    breakdown: Tuple[TargetComponent, ...] = ()

    def __post_init__(self):
        _freeze(self, "breakdown")

    def to_dict(self) -> dict:
        return {
            "price": self.price,
            "method": self.method,
            "range_low": self.range_low,
            "range_high": self.range_high,
            "breakdown": [c.to_dict() for c in self.breakdown],
        }


@dataclass(frozen=True)
class ConfidenceScore:
    score: float
    level: str   # low / medium / high

    def to_dict(self) -> dict:
        return {"score": self.score, "level": self.level}


@dataclass(frozen=True)
class Recommendation:
    action: str   # STRONG_BUY / BUY / HOLD / SELL / STRONG_SELL
    reasoning: str
    expected_return: float

    def to_dict(self) -> dict:
        return {
            "action": self.action,
            "reasoning": self.reasoning,
            "expected_return": self.expected_return,
        }


# ---------------------------------------------------------------------------
# Final record
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AnalysisCalculations:
    """Raw outputs of every stage, kept alongside the headline numbers."""

    technical: Optional[IndicatorSet]
    fibonacci: Optional[FibonacciLevels]
    support_resistance: SupportResistance
    trend: TrendState
    volatility: VolatilityState

    def to_dict(self) -> dict:
        return {
            "technical": self.technical.to_dict() if self.technical else None,
            "fibonacci": self.fibonacci.to_dict() if self.fibonacci else None,
            "support_resistance": self.support_resistance.to_dict(),
            "trend": self.trend.to_dict(),
            "volatility": self.volatility.to_dict(),
        }


@dataclass(frozen=True)
class AnalysisRecord:
    symbol: str
    analysis_date: str
    current_price: float
    price_change: float
    price_change_percent: float
    volume: float
    target: PriceTarget
    confidence: ConfidenceScore
    calculations: AnalysisCalculations
    recommendation: Recommendation
    analyst_consensus: Optional[AnalystConsensus] = None

    @property
    def indicators(self) -> Optional[IndicatorSet]:
        return self.calculations.technical

    @property
    def target_price(self) -> float:
        return self.target.price

    @property
    def confidence_score(self) -> float:
        return self.confidence.score

    def to_dict(self) -> dict:
        out = {
            "symbol": self.symbol,
            "analysis_date": self.analysis_date,
            "current_price": self.current_price,
            "price_change": self.price_change,
            "price_change_percent": self.price_change_percent,
            "volume": self.volume,
            "target_price": self.target.price,
            "analysis_method": self.target.method,
            "price_range": {"low": self.target.range_low, "high": self.target.range_high},
            "target_breakdown": [c.to_dict() for c in self.target.breakdown],
            "confidence_score": self.confidence.score,
            "confidence_level": self.confidence.level,
            "technical_indicators": self.indicators.to_dict() if self.indicators else None,
            "calculations": self.calculations.to_dict(),
            "recommendation": self.recommendation.to_dict(),
        }
        out.update((self.analyst_consensus or AnalystConsensus()).to_dict())
        return out
