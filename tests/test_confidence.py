"""Tests for price_analyst.analysis.confidence -- heuristic confidence score."""

import pytest

from price_analyst.analysis.confidence import score_confidence
from price_analyst.models import (
    IndicatorSet,
    PriceLevel,
    SupportResistance,
    TrendState,
    VolatilityState,
)


def _ind(rsi_value):
    return IndicatorSet(rsi=[55.0, rsi_value])


def _sr(n_support=2, n_resistance=0):
    return SupportResistance(
        support=[PriceLevel(10.0, 3, i) for i in range(n_support)],
        resistance=[PriceLevel(12.0, 3, i) for i in range(n_resistance)],
    )


class TestScoreConfidence:

    def test_zero_sample_forces_zero(self):
        result = score_confidence(
            _ind(50.0), TrendState("strong_uptrend"), VolatilityState(), _sr(), 0,
        )
        assert result.score == 0
        assert result.level == "low"

    def test_clamped_at_100(self):
        result = score_confidence(_ind(50.0), TrendState("uptrend"), VolatilityState(), _sr(), 250)
        # 50 + 10 + 15 + 10 + 10 + 15 = 110
        assert result.score == 100
        assert result.level == "high"

    def test_clamped_at_0(self):
        result = score_confidence(None, None, None, None, 10)
        # 50 - 10 - 15 - 10 - 10 - 20 = -15
        assert result.score == 0
        assert result.level == "low"

    def test_rsi_inside_band(self):
        result = score_confidence(_ind(50.0), TrendState("neutral"), VolatilityState(), _sr(), 60)
        # 50 + 10 - 15 + 10 + 10 + 0
        assert result.score == 65
        assert result.level == "medium"

    @pytest.mark.parametrize("value", [30.0, 70.0])
    def test_rsi_band_is_inclusive(self, value):
        result = score_confidence(_ind(value), TrendState("neutral"), VolatilityState(), _sr(), 60)
        assert result.score == 65

    def test_rsi_outside_band_no_adjustment(self):
        result = score_confidence(_ind(85.0), TrendState("neutral"), VolatilityState(), _sr(), 60)
        assert result.score == 55

    def test_rsi_missing_penalised(self):
        result = score_confidence(IndicatorSet(), TrendState("neutral"), VolatilityState(), _sr(), 60)
        assert result.score == 45

    @pytest.mark.parametrize("tier,expected", [("low", 65), ("medium", 60), ("high", 55)])
    def test_volatility_tiers(self, tier, expected):
        vol = VolatilityState(0.01, 0.2, tier)
        result = score_confidence(_ind(50.0), TrendState("neutral"), vol, _sr(), 60)
        assert result.score == expected

    def test_volatility_missing_penalised(self):
        result = score_confidence(_ind(50.0), TrendState("neutral"), None, _sr(), 60)
        assert result.score == 45

    def test_levels_need_two_on_one_side(self):
        one_each = score_confidence(_ind(50.0), TrendState("neutral"), VolatilityState(), _sr(1, 1), 60)
        two_res = score_confidence(_ind(50.0), TrendState("neutral"), VolatilityState(), _sr(0, 2), 60)
        assert one_each.score == 45
        assert two_res.score == 65

    @pytest.mark.parametrize("n,expected", [(200, 80), (100, 70), (50, 65), (49, 45), (1, 45)])
    def test_sample_size_bonus(self, n, expected):
        result = score_confidence(_ind(50.0), TrendState("neutral"), VolatilityState(), _sr(), n)
        assert result.score == expected

    def test_level_thresholds(self):
        high = score_confidence(_ind(50.0), TrendState("neutral"), VolatilityState(), _sr(), 200)
        assert high.score == 80
        assert high.level == "high"
