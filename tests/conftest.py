"""Shared pytest fixtures for the Price Analyst test suite.

Provides synthetic OHLCV data with a fixed random seed for reproducibility.
All fixtures are independent of external data providers.
"""

import numpy as np
import pandas as pd
import pytest


def make_ohlcv(close, spread=0.005, volume=1_000_000.0):
    """Build an OHLCV DataFrame around a close array."""
    close = np.asarray(close, dtype=float)
    n = len(close)
    dates = pd.bdate_range(start="2023-01-02", periods=n)
    return pd.DataFrame(
        {
            "Open": close,
            "High": close * (1 + spread),
            "Low": close * (1 - spread),
            "Close": close,
            "Volume": np.full(n, volume),
        },
        index=dates,
    )


# ---------------------------------------------------------------------------
# 1. Random-walk OHLCV
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_ohlcv():
    """Generate a synthetic OHLCV DataFrame with 252 rows and realistic prices.

    Uses a geometric Brownian motion model seeded at 42 for reproducibility.
    Starting price ~150, daily drift ~0.04%, daily vol ~1.5%.
    """
    np.random.seed(42)
    n = 252
    dates = pd.bdate_range(start="2023-01-02", periods=n)
    drift = 0.0004
    vol = 0.015
    log_returns = np.random.normal(drift, vol, n)
    close = 150.0 * np.exp(np.cumsum(log_returns))

    # Build OHLCV from close
    high = close * (1 + np.abs(np.random.normal(0.002, 0.005, n)))
    low = close * (1 - np.abs(np.random.normal(0.002, 0.005, n)))
    open_ = close * (1 + np.random.normal(0, 0.003, n))
    volume = np.random.randint(1_000_000, 10_000_000, n).astype(float)

    df = pd.DataFrame(
        {
            "Open": open_,
            "High": high,
            "Low": low,
            "Close": close,
            "Volume": volume,
        },
        index=dates,
    )
    return df


# ---------------------------------------------------------------------------
# 2. Deterministic shapes
# ---------------------------------------------------------------------------

@pytest.fixture
def rising_ohlcv():
    """250 bars with closes rising linearly from 100 to 150."""
    return make_ohlcv(np.linspace(100.0, 150.0, 250))


@pytest.fixture
def falling_ohlcv():
    """250 bars with closes falling linearly from 150 to 100."""
    return make_ohlcv(np.linspace(150.0, 100.0, 250))


@pytest.fixture
def flat_ohlcv():
    """60 bars with every price at 100."""
    return make_ohlcv(np.full(60, 100.0), spread=0.0)
