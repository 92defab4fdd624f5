"""Heuristic confidence score for a synthesized target price."""

from __future__ import annotations

from typing import Optional

from price_analyst.models import (
    ConfidenceScore,
    IndicatorSet,
    SupportResistance,
    TrendState,
    VolatilityState,
)

_BASE_SCORE = 50
_VOLATILITY_ADJ = {"low": 10, "medium": 5, "high": 0}


def _level(score: float) -> str:
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"


def score_confidence(
    indicators: Optional[IndicatorSet],
    trend: Optional[TrendState],
    volatility: Optional[VolatilityState],
    support_resistance: Optional[SupportResistance],
    sample_size: int,
) -> ConfidenceScore:
    """Score 0-100 from indicator coverage, trend clarity, volatility tier,
    level count and sample size.  Each adjustment is applied independently;
    an empty sample forces the score to 0."""
    score = _BASE_SCORE

    # RSI in the neutral band backs the target; missing RSI counts against it
    latest_rsi = indicators.latest_rsi if indicators is not None else None
    if latest_rsi is None:
        score -= 10
    elif 30 <= latest_rsi <= 70:
        score += 10

    if trend is not None and trend.trend and trend.trend != "neutral":
        score += 15
    else:
        score -= 15

    if volatility is not None and volatility.current_level:
        score += _VOLATILITY_ADJ.get(volatility.current_level, 0)
    else:
        score -= 10

    sr = support_resistance
    if sr is not None and (len(sr.support) >= 2 or len(sr.resistance) >= 2):
        score += 10
    else:
        score -= 10

    if sample_size >= 200:
        score += 15
    elif sample_size >= 100:
        score += 5
    elif sample_size >= 50:
        pass
    elif sample_size > 0:
        score -= 20
    else:
        score = 0

    score = min(100, max(0, score))
    return ConfidenceScore(score=score, level=_level(score))
