"""Tests for price_analyst.analysis.recommendation -- action mapping and precedence."""

import pytest

from price_analyst.analysis.recommendation import recommend
from price_analyst.models import ConfidenceScore


class TestRecommend:

    def test_buy(self):
        rec = recommend(115.0, 100.0, 60)
        assert rec.action == "BUY"
        assert rec.reasoning == "Target price indicates 15.0% upside potential"
        assert rec.expected_return == pytest.approx(15.0)

    def test_large_upside_high_confidence_stays_buy(self):
        # BUY is checked before STRONG_BUY
        assert recommend(130.0, 100.0, 90).action == "BUY"

    def test_strong_buy(self):
        rec = recommend(125.0, 100.0, 45)
        assert rec.action == "STRONG_BUY"
        assert rec.reasoning == "Strong upside potential of 25.0%"

    def test_moderate_upside_low_confidence_is_hold(self):
        assert recommend(115.0, 100.0, 50).action == "HOLD"

    def test_sell(self):
        rec = recommend(85.0, 100.0, 60)
        assert rec.action == "SELL"
        assert rec.reasoning == "Target price indicates 15.0% downside risk"
        assert rec.expected_return == pytest.approx(-15.0)

    def test_large_downside_high_confidence_stays_sell(self):
        assert recommend(70.0, 100.0, 90).action == "SELL"

    def test_strong_sell(self):
        rec = recommend(75.0, 100.0, 40)
        assert rec.action == "STRONG_SELL"
        assert rec.reasoning == "Significant downside risk of 25.0%"

    def test_low_confidence_is_hold(self):
        assert recommend(150.0, 100.0, 39).action == "HOLD"
        assert recommend(50.0, 100.0, 39).action == "HOLD"

    def test_hold(self):
        rec = recommend(105.0, 100.0, 95)
        assert rec.action == "HOLD"
        assert rec.reasoning == "Target price close to current price"
        assert rec.expected_return == pytest.approx(5.0)

    def test_accepts_confidence_score(self):
        assert recommend(115.0, 100.0, ConfidenceScore(75, "medium")).action == "BUY"

    def test_zero_current_price(self):
        rec = recommend(10.0, 0.0, 80)
        assert rec.action == "HOLD"
        assert rec.expected_return == 0.0
