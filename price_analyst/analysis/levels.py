"""Level detection: Fibonacci retracements and support/resistance clusters."""

from __future__ import annotations

from typing import List

import numpy as np
import pandas as pd

from price_analyst.models import FibonacciLevels, PriceLevel, SupportResistance

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_FIBONACCI_RATIOS = {
    "0%": 0.0,
    "23.6%": 0.236,
    "38.2%": 0.382,
    "50%": 0.5,
    "61.8%": 0.618,
    "100%": 1.0,
}
_LEVEL_TOLERANCE = 0.02    # 2 % band for neighbours and touches
_LEVEL_MIN_TOUCHES = 2
_LEVEL_MAX_RESULTS = 5
_LEVEL_MIN_ROWS = 5


# ---------------------------------------------------------------------------
# Fibonacci retracement
# ---------------------------------------------------------------------------
def fibonacci_levels(df: pd.DataFrame) -> FibonacciLevels:
    """Retracement levels between the highest and lowest close.

    0% maps to the high and 100% to the low.  Fewer than two bars give an
    all-zero structure.
    """
    if len(df) < 2:
        return FibonacciLevels(0.0, 0.0, {label: 0.0 for label in _FIBONACCI_RATIOS})

    close = df["Close"].values.astype(float)
    high = float(np.max(close))
    low = float(np.min(close))
    diff = high - low

    levels = {label: high - diff * ratio for label, ratio in _FIBONACCI_RATIOS.items()}
    # pin the endpoints exactly
    levels["0%"] = high
    levels["100%"] = low
    return FibonacciLevels(high, low, levels)


# ---------------------------------------------------------------------------
# Support / resistance
# ---------------------------------------------------------------------------
def find_levels(
    values,
    min_touches: int = _LEVEL_MIN_TOUCHES,
    tolerance: float = _LEVEL_TOLERANCE,
    max_levels: int = _LEVEL_MAX_RESULTS,
) -> List[PriceLevel]:
    """Find recurring price levels in a single price column.

    A point (ignoring the first and last two) is a candidate unless it sits
    more than *tolerance* above either neighbour.  Its touch count is itself
    plus every other point strictly within ``price * tolerance``.  Candidates
    with at least *min_touches* are ranked by touch count, ties keeping
    series order.
    """
    arr = np.asarray(values, dtype=float)
    n = len(arr)
    if n < _LEVEL_MIN_ROWS:
        return []

    levels: List[PriceLevel] = []
    for i in range(2, n - 2):
        current = arr[i]
        if current > arr[i - 1] * (1 + tolerance) or current > arr[i + 1] * (1 + tolerance):
            continue
        near = np.abs(arr - current) < current * tolerance
        touches = 1 + int(near.sum()) - int(near[i])
        if touches >= min_touches:
            levels.append(PriceLevel(float(current), touches, i))

    levels.sort(key=lambda lvl: lvl.touch_count, reverse=True)
    return levels[:max_levels]


def support_resistance(df: pd.DataFrame) -> SupportResistance:
    """Support from the Low column, resistance from the High column."""
    if len(df) < _LEVEL_MIN_ROWS:
        return SupportResistance()
    return SupportResistance(
        support=find_levels(df["Low"].values),
        resistance=find_levels(df["High"].values),
    )
