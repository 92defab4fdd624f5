"""Analysis orchestrator.

Runs indicators, levels, trend and volatility over a daily price series,
synthesizes a target price, scores it, and returns one AnalysisRecord.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Union

import pandas as pd

from price_analyst.analysis.confidence import score_confidence
from price_analyst.analysis.indicators import compute_indicators
from price_analyst.analysis.levels import fibonacci_levels, support_resistance
from price_analyst.analysis.recommendation import recommend
from price_analyst.analysis.target import synthesize_target
from price_analyst.analysis.trend import classify_trend, classify_volatility
from price_analyst.config import AnalysisSettings, log_level
from price_analyst.data import PriceInput, to_frame
from price_analyst.errors import NoDataAvailable
from price_analyst.models import (
    AnalysisCalculations,
    AnalysisRecord,
    AnalystConsensus,
    QuoteSnapshot,
    SupportResistance,
    TrendState,
    VolatilityState,
)
from price_analyst.utils.logger import setup_logger

logger = setup_logger("engine", log_level())

QuoteInput = Union[QuoteSnapshot, Dict[str, Any], None]
ConsensusInput = Union[AnalystConsensus, Dict[str, Any], None]


def _as_quote(quote: QuoteInput) -> Optional[QuoteSnapshot]:
    if quote is None or isinstance(quote, QuoteSnapshot):
        return quote
    return QuoteSnapshot(
        price=float(quote["price"]),
        previous_close=quote.get("previous_close", quote.get("previousClose")),
        volume=quote.get("volume") or 0.0,
    )


def _as_consensus(consensus: ConsensusInput) -> Optional[AnalystConsensus]:
    if consensus is None or isinstance(consensus, AnalystConsensus):
        return consensus
    return AnalystConsensus.from_dict(consensus)


class PriceAnalyzer:
    """Produce a price-target analysis for one symbol at a time.

    Holds only read-only settings, so a single instance can serve several
    symbols, including from several threads.
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None) -> None:
        self.settings = settings or AnalysisSettings.from_settings()

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------
    def run_calculations(self, df: pd.DataFrame) -> AnalysisCalculations:
        """Run every stage that has enough history; the rest fall back to
        empty or neutral defaults."""
        s = self.settings
        n = len(df)
        return AnalysisCalculations(
            technical=compute_indicators(df) if n >= s.min_bars_indicators else None,
            fibonacci=fibonacci_levels(df) if n >= s.min_bars_levels else None,
            support_resistance=(
                support_resistance(df) if n >= s.min_bars_levels else SupportResistance()
            ),
            trend=classify_trend(df) if n >= s.min_bars_trend else TrendState("neutral", None),
            volatility=(
                classify_volatility(df, s.volatility_period)
                if n >= s.min_bars_volatility else VolatilityState()
            ),
        )

    @staticmethod
    def _current_quote(df: pd.DataFrame, quote: Optional[QuoteSnapshot]) -> QuoteSnapshot:
        """Latest quote, or one built from the last two bars."""
        if quote is not None:
            return quote
        last = df.iloc[-1]
        prev_close = float(df["Close"].iloc[-2]) if len(df) > 1 else float(last["Close"])
        return QuoteSnapshot(
            price=float(last["Close"]),
            previous_close=prev_close,
            volume=float(last["Volume"]),
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def analyze(
        self,
        symbol: str,
        prices: PriceInput,
        quote: QuoteInput = None,
        consensus: ConsensusInput = None,
    ) -> AnalysisRecord:
        """Analyse an ascending daily price series.

        Args:
            symbol: Ticker the series belongs to.
            prices: OHLCV DataFrame or sequence of PriceBar, oldest first.
            quote: Optional latest quote (``price``, ``previous_close``,
                ``volume``); the last bar is used when absent.
            consensus: Optional analyst consensus, attached unvalidated.

        Raises:
            NoDataAvailable: the series is empty.
        """
        df = to_frame(prices)
        n = len(df)
        if n == 0:
            logger.error("No price data for %s", symbol)
            raise NoDataAvailable(symbol)

        logger.debug("Analyzing %s over %d bars", symbol, n)
        if n < self.settings.limited_data_warning:
            logger.warning(
                "Limited data for %s (%d bars); results may be less accurate", symbol, n,
            )

        calc = self.run_calculations(df)
        last_close = float(df["Close"].iloc[-1])

        target = synthesize_target(
            calc.technical,
            calc.fibonacci,
            calc.support_resistance,
            calc.trend,
            calc.volatility,
            last_close,
        )
        confidence = score_confidence(
            calc.technical, calc.trend, calc.volatility, calc.support_resistance, n,
        )

        snap = self._current_quote(df, _as_quote(quote))
        rec = recommend(target.price, snap.price, confidence)

        record = AnalysisRecord(
            symbol=symbol,
            analysis_date=date.today().isoformat(),
            current_price=snap.price,
            price_change=snap.change,
            price_change_percent=snap.change_percent,
            volume=snap.volume,
            target=target,
            confidence=confidence,
            calculations=calc,
            recommendation=rec,
            analyst_consensus=_as_consensus(consensus),
        )
        logger.info(
            "%s: target=%.2f (%s) confidence=%s action=%s",
            symbol, target.price, target.method, confidence.score, rec.action,
        )
        return record


_default_analyzer: Optional[PriceAnalyzer] = None


def analyze(
    symbol: str,
    prices: PriceInput,
    quote: QuoteInput = None,
    consensus: ConsensusInput = None,
) -> AnalysisRecord:
    """Analyse with a shared default PriceAnalyzer."""
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = PriceAnalyzer()
    return _default_analyzer.analyze(symbol, prices, quote, consensus)
