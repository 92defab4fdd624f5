"""Trend and volatility classification."""

from __future__ import annotations

import numpy as np
import pandas as pd

from price_analyst.analysis.indicators import sma
from price_analyst.models import MovingAverages, TrendState, VolatilityState

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_MIN_ROWS_TREND = 200
_TRADING_DAYS = 252
_VOL_HIGH = 0.25
_VOL_MEDIUM = 0.15


def classify_trend(df: pd.DataFrame) -> TrendState:
    """Label the trend from the ordering of price, SMA20, SMA50 and SMA200.

    Needs 200 bars; shorter series are neutral with no moving averages.
    """
    if len(df) < _MIN_ROWS_TREND:
        return TrendState("neutral", None)

    close = df["Close"].values.astype(float)
    sma20, sma50, sma200 = sma(close, 20), sma(close, 50), sma(close, 200)
    if len(sma20) == 0 or len(sma50) == 0 or len(sma200) == 0:
        return TrendState("neutral", None)

    ma = MovingAverages(float(sma20[-1]), float(sma50[-1]), float(sma200[-1]))
    price = float(close[-1])

    if price > ma.short > ma.medium > ma.long:
        trend = "strong_uptrend"
    elif price > ma.short > ma.medium:
        trend = "uptrend"
    elif price < ma.short < ma.medium < ma.long:
        trend = "strong_downtrend"
    elif price < ma.short < ma.medium:
        trend = "downtrend"
    else:
        trend = "neutral"
    return TrendState(trend, ma)


def classify_volatility(df: pd.DataFrame, period: int = 20) -> VolatilityState:
    """Annualised volatility of log returns over the last *period* closes.

    Tiers: above 25 % high, above 15 % medium, otherwise low.  Fewer than two
    bars give zeroed low-tier defaults.
    """
    if len(df) < 2:
        return VolatilityState()

    window = min(period, len(df))
    closes = df["Close"].values.astype(float)[-window:]
    if len(closes) < 2:
        return VolatilityState()

    returns = np.diff(np.log(closes))
    std = float(np.std(returns, ddof=1)) if len(returns) > 1 else 0.0
    annualized = std * np.sqrt(_TRADING_DAYS)

    if annualized > _VOL_HIGH:
        level = "high"
    elif annualized > _VOL_MEDIUM:
        level = "medium"
    else:
        level = "low"
    return VolatilityState(std, float(annualized), level)
