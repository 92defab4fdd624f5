"""Target price synthesis from bands, retracements, levels and trend."""

from __future__ import annotations

from typing import List, Optional

from price_analyst.models import (
    FibonacciLevels,
    IndicatorSet,
    PriceTarget,
    SupportResistance,
    TargetComponent,
    TrendState,
    VolatilityState,
)

# ---------------------------------------------------------------------------
# Component weights
# ---------------------------------------------------------------------------
_W_BOLLINGER_UPPER = 0.15
_W_BOLLINGER_MIDDLE = 0.10
_W_FIBONACCI = 0.20
_W_LEVEL = 0.15
_W_MA_PROJECTION = 0.15
_MA_PROJECTION_UP = 1.05
_MA_PROJECTION_DOWN = 0.95
_RANGE_VOL_FACTOR = 0.5
_RANGE_FALLBACK_PCT = 0.1


def _range_adjustment(price: float, volatility: Optional[VolatilityState]) -> float:
    if volatility is not None and volatility.annualized_volatility:
        return volatility.annualized_volatility * price * _RANGE_VOL_FACTOR
    return price * _RANGE_FALLBACK_PCT


def _components(
    indicators: Optional[IndicatorSet],
    fibonacci: Optional[FibonacciLevels],
    sr: Optional[SupportResistance],
    trend: Optional[TrendState],
) -> List[TargetComponent]:
    out: List[TargetComponent] = []

    bb = indicators.latest_bollinger if indicators is not None else None
    if bb is not None:
        if bb.upper_band:
            out.append(TargetComponent(bb.upper_band, _W_BOLLINGER_UPPER, "bollinger_upper"))
        if bb.middle_band:
            out.append(TargetComponent(bb.middle_band, _W_BOLLINGER_MIDDLE, "bollinger_middle"))

    if trend is None:
        return out
    up, down = trend.is_uptrend, trend.is_downtrend

    if fibonacci is not None:
        if up and fibonacci.levels.get("61.8%"):
            out.append(TargetComponent(fibonacci.levels["61.8%"], _W_FIBONACCI, "fibonacci_up"))
        elif down and fibonacci.levels.get("38.2%"):
            out.append(TargetComponent(fibonacci.levels["38.2%"], _W_FIBONACCI, "fibonacci_down"))

    if sr is not None:
        if up and sr.resistance and sr.resistance[0].price:
            out.append(TargetComponent(sr.resistance[0].price, _W_LEVEL, "resistance"))
        if down and sr.support and sr.support[0].price:
            out.append(TargetComponent(sr.support[0].price, _W_LEVEL, "support"))

    ma = trend.moving_averages
    if ma is not None and ma.medium:
        if up:
            out.append(TargetComponent(ma.medium * _MA_PROJECTION_UP, _W_MA_PROJECTION, "ma_projection_up"))
        elif down:
            out.append(TargetComponent(ma.medium * _MA_PROJECTION_DOWN, _W_MA_PROJECTION, "ma_projection_down"))

    return out


def synthesize_target(
    indicators: Optional[IndicatorSet],
    fibonacci: Optional[FibonacciLevels],
    support_resistance: Optional[SupportResistance],
    trend: Optional[TrendState],
    volatility: Optional[VolatilityState],
    current_price: float,
) -> PriceTarget:
    """Weighted mean of every applicable price candidate.

    With no candidates the target is the current price (method
    ``current_price``).  The range is ``± annualised vol * price * 0.5``,
    or ``± 10 %`` when volatility is missing or zero.
    """
    components = _components(indicators, fibonacci, support_resistance, trend)

    if not components:
        adj = _range_adjustment(current_price, volatility)
        return PriceTarget(
            price=current_price,
            method="current_price",
            range_low=current_price - adj,
            range_high=current_price + adj,
            breakdown=(),
        )

    total_weight = sum(c.weight for c in components)
    target = sum(c.price * c.weight for c in components) / total_weight
    adj = _range_adjustment(target, volatility)
    return PriceTarget(
        price=target,
        method="weighted_average",
        range_low=target - adj,
        range_high=target + adj,
        breakdown=tuple(components),
    )
