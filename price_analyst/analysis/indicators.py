"""Indicator library: stateless numeric transforms over price arrays.

SMA, EMA, RSI and Bollinger bands come from TA-Lib (C-based).  MACD is
assembled from TA-Lib EMAs, and ADX is computed by hand with plain SMA
smoothing instead of Wilder's, which is what the downstream scoring was tuned
against.

Every function returns only the defined part of its output: the leading
warm-up NaNs TA-Lib emits are dropped, so a series of length L smoothed over
``period`` yields ``L - period + 1`` values.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
import talib

from price_analyst.config import log_level
from price_analyst.models import BollingerPoint, IndicatorSet, MacdPoint
from price_analyst.utils.logger import setup_logger

logger = setup_logger("indicators", log_level())

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
_MIN_ROWS_INDICATORS = 20   # below this compute_indicators returns None
_RSI_PERIOD = 14
_MACD_FAST, _MACD_SLOW, _MACD_SIGNAL = 12, 26, 9
_BB_PERIOD, _BB_STDDEV = 20, 2.0
_ADX_PERIOD = 14


def _as_array(values) -> np.ndarray:
    return np.ascontiguousarray(np.asarray(values, dtype=float))


def _defined(out: np.ndarray, start: int) -> np.ndarray:
    return out[start:] if len(out) > start else np.empty(0)


# ---------------------------------------------------------------------------
# Moving averages
# ---------------------------------------------------------------------------
def sma(values, period: int) -> np.ndarray:
    """Simple trailing mean; ``max(0, L - period + 1)`` values."""
    arr = _as_array(values)
    if period < 1 or len(arr) < period:
        return np.empty(0)
    return _defined(talib.SMA(arr, timeperiod=period), period - 1)


def ema(values, period: int) -> np.ndarray:
    """Exponential moving average seeded with the SMA of the first window."""
    arr = _as_array(values)
    if period < 1 or len(arr) < period:
        return np.empty(0)
    return _defined(talib.EMA(arr, timeperiod=period), period - 1)


# ---------------------------------------------------------------------------
# Oscillators
# ---------------------------------------------------------------------------
def rsi(values, period: int = _RSI_PERIOD) -> Optional[np.ndarray]:
    """Wilder RSI.  Needs ``period`` price changes, i.e. more than
    ``period`` closes; returns ``L - period`` values in [0, 100]."""
    arr = _as_array(values)
    if len(arr) <= period:
        return None
    out = _defined(talib.RSI(arr, timeperiod=period), period)
    return np.clip(out, 0.0, 100.0)


def macd(
    values,
    fast: int = _MACD_FAST,
    slow: int = _MACD_SLOW,
    signal: int = _MACD_SIGNAL,
) -> Optional[Tuple[MacdPoint, ...]]:
    """MACD line (EMA fast - EMA slow), its EMA signal line and histogram.

    One point per bar from the first slow-EMA value on.  Signal and
    histogram stay None until ``signal`` MACD values exist.
    """
    arr = _as_array(values)
    if len(arr) < slow:
        return None
    fast_ema = ema(arr, fast)
    slow_ema = ema(arr, slow)
    line = fast_ema[-len(slow_ema):] - slow_ema

    sig = ema(line, signal)
    offset = len(line) - len(sig)
    points: List[MacdPoint] = []
    for i, m in enumerate(line):
        if i < offset:
            points.append(MacdPoint(float(m)))
        else:
            s = float(sig[i - offset])
            points.append(MacdPoint(float(m), s, float(m) - s))
    return tuple(points)


# ---------------------------------------------------------------------------
# Bands
# ---------------------------------------------------------------------------
def bollinger_bands(
    values, period: int = _BB_PERIOD, num_std: float = _BB_STDDEV,
) -> Optional[Tuple[BollingerPoint, ...]]:
    """SMA ± ``num_std`` population standard deviations, with %B.

    %B is 0 when the band collapses to zero width (flat prices).
    """
    arr = _as_array(values)
    if len(arr) < period:
        return None
    upper, middle, lower = talib.BBANDS(
        arr, timeperiod=period, nbdevup=num_std, nbdevdn=num_std, matype=0,
    )
    start = period - 1
    closes = arr[start:]
    points: List[BollingerPoint] = []
    for close, up, mid, lo in zip(closes, upper[start:], middle[start:], lower[start:]):
        width = up - lo
        pct_b = (close - lo) / width if width > 1e-9 else 0.0
        points.append(BollingerPoint(float(up), float(mid), float(lo), float(pct_b)))
    return tuple(points)


# ---------------------------------------------------------------------------
# Trend strength
# ---------------------------------------------------------------------------
def adx(high, low, close, period: int = _ADX_PERIOD) -> Optional[np.ndarray]:
    """Average Directional Index with trailing-SMA smoothing.

    True range and +DM/-DM are taken bar over bar, each smoothed with
    SMA(period); DX is smoothed with another SMA(period).  A zero ATR or a
    zero DI sum yields 0 rather than NaN.  Returns None when fewer than
    ``2 * period`` bars leave no room for a single ADX value.
    """
    h, l, c = _as_array(high), _as_array(low), _as_array(close)
    if len(c) < 2 * period:
        return None

    tr = np.maximum.reduce([
        np.abs(h[1:] - l[1:]),
        np.abs(h[1:] - c[:-1]),
        np.abs(l[1:] - c[:-1]),
    ])
    up_move = h[1:] - h[:-1]
    down_move = l[:-1] - l[1:]
    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)

    atr = sma(tr, period)
    with np.errstate(divide="ignore", invalid="ignore"):
        plus_di = np.where(atr > 0, sma(plus_dm, period) * 100 / atr, 0.0)
        minus_di = np.where(atr > 0, sma(minus_dm, period) * 100 / atr, 0.0)
        di_sum = plus_di + minus_di
        dx = np.where(di_sum > 0, np.abs(plus_di - minus_di) / di_sum * 100, 0.0)

    return sma(dx, period)


# ---------------------------------------------------------------------------
# Full indicator set
# ---------------------------------------------------------------------------
def _to_tuple(arr: Optional[np.ndarray]) -> Optional[Tuple[float, ...]]:
    if arr is None or len(arr) == 0:
        return None
    return tuple(float(v) for v in arr)


def compute_indicators(df: pd.DataFrame) -> Optional[IndicatorSet]:
    """Compute every indicator over an OHLCV DataFrame.

    Returns None below 20 bars.  Above that each field is gated on its own
    minimum length and left as None when unmet.
    """
    n = len(df)
    if n < _MIN_ROWS_INDICATORS:
        return None
    logger.debug("Computing indicators over %d bars", n)

    close = df["Close"].values.astype(float)
    high = df["High"].values.astype(float)
    low = df["Low"].values.astype(float)

    return IndicatorSet(
        sma20=_to_tuple(sma(close, 20)) if n >= 20 else None,
        sma50=_to_tuple(sma(close, 50)) if n >= 50 else None,
        sma200=_to_tuple(sma(close, 200)) if n >= 200 else None,
        ema12=_to_tuple(ema(close, 12)) if n >= 12 else None,
        ema26=_to_tuple(ema(close, 26)) if n >= 26 else None,
        rsi=_to_tuple(rsi(close, _RSI_PERIOD)) if n >= _RSI_PERIOD else None,
        macd=macd(close) if n >= _MACD_SLOW else None,
        bollinger=bollinger_bands(close) if n >= _BB_PERIOD else None,
        adx=_to_tuple(adx(high, low, close, _ADX_PERIOD)) if n >= _ADX_PERIOD else None,
    )
