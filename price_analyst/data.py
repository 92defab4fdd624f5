"""Price-series input helpers.

The engine works on an OHLCV DataFrame (``Open, High, Low, Close, Volume``)
ordered oldest -> newest.  These helpers build that frame from bars, CSV files
or frames with other column spellings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

import pandas as pd

from price_analyst.config import log_level
from price_analyst.models import PriceBar
from price_analyst.utils.logger import setup_logger

logger = setup_logger("data", log_level())

OHLCV_COLUMNS = ["Open", "High", "Low", "Close", "Volume"]

_COLUMN_ALIASES = {
    "open": "Open", "open_price": "Open",
    "high": "High", "high_price": "High",
    "low": "Low", "low_price": "Low",
    "close": "Close", "close_price": "Close",
    "volume": "Volume",
}

PriceInput = Union[pd.DataFrame, Iterable[PriceBar]]


def bars_to_frame(bars: Iterable[PriceBar]) -> pd.DataFrame:
    """Convert a sequence of PriceBar into an OHLCV DataFrame indexed by date."""
    rows = [
        {
            "Date": b.date,
            "Open": b.open,
            "High": b.high,
            "Low": b.low,
            "Close": b.close,
            "Volume": b.volume,
        }
        for b in bars
    ]
    if not rows:
        return pd.DataFrame(columns=OHLCV_COLUMNS, dtype=float)
    df = pd.DataFrame(rows)
    df.index = pd.to_datetime(df.pop("Date"))
    df.index.name = "Date"
    return normalize_ohlcv(df)


def normalize_ohlcv(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with canonical column names, numeric values, ascending
    order and no duplicate dates (the last row for a date wins)."""
    if df.empty:
        return pd.DataFrame(columns=OHLCV_COLUMNS, dtype=float)

    r = df.rename(columns={c: _COLUMN_ALIASES.get(str(c).lower(), c) for c in df.columns})
    if "Volume" not in r.columns:
        r["Volume"] = 0.0
    missing = [c for c in OHLCV_COLUMNS if c not in r.columns]
    if missing:
        raise ValueError(f"Price data is missing columns: {', '.join(missing)}")

    r = r[OHLCV_COLUMNS].copy()
    for col in ["Open", "High", "Low", "Close"]:
        r[col] = pd.to_numeric(r[col], errors="coerce")
    r["Volume"] = pd.to_numeric(r["Volume"], errors="coerce").fillna(0).astype(float)

    r = r.sort_index(kind="mergesort")
    dupes = r.index.duplicated(keep="last")
    if dupes.any():
        logger.debug("Dropping %d duplicate dates", int(dupes.sum()))
        r = r[~dupes]
    return r


def to_frame(prices: PriceInput) -> pd.DataFrame:
    """Accept either a DataFrame or PriceBar sequence (None is empty)."""
    if prices is None:
        return pd.DataFrame(columns=OHLCV_COLUMNS, dtype=float)
    if isinstance(prices, pd.DataFrame):
        return normalize_ohlcv(prices)
    return bars_to_frame(prices)


def load_price_csv(path: Union[str, Path], date_column: str = "date") -> pd.DataFrame:
    """Read daily bars from a CSV file with a date column."""
    df = pd.read_csv(path)
    lookup = {str(c).lower(): c for c in df.columns}
    col = lookup.get(date_column.lower())
    if col is None:
        raise ValueError(f"{path}: no '{date_column}' column")
    df.index = pd.to_datetime(df.pop(col))
    df.index.name = "Date"
    frame = normalize_ohlcv(df)
    logger.info("Loaded %d bars from %s", len(frame), path)
    return frame


def latest_bars(df: pd.DataFrame, n: int = 200) -> pd.DataFrame:
    """Most recent *n* bars, oldest first."""
    if n <= 0:
        return df.iloc[0:0]
    return df.iloc[-n:]
