"""Map target-vs-current delta and confidence to a trade action."""

from __future__ import annotations

from typing import Union

from price_analyst.models import ConfidenceScore, Recommendation

ACTIONS = ("STRONG_BUY", "BUY", "HOLD", "SELL", "STRONG_SELL")


def recommend(
    target_price: float,
    current_price: float,
    confidence: Union[ConfidenceScore, float],
) -> Recommendation:
    """Return the action for the expected move to *target_price*.

    Branches are checked in order and the first match wins: BUY
    (>10 %, confidence >= 60), STRONG_BUY (>20 %, >= 40), SELL (<-10 %,
    >= 60), STRONG_SELL (<-20 %, >= 40), else HOLD.  Because BUY is tested
    first, a move above 20 % at confidence >= 60 is a BUY, not a STRONG_BUY;
    the same holds on the sell side.
    """
    score = confidence.score if isinstance(confidence, ConfidenceScore) else float(confidence)
    delta = (target_price - current_price) / current_price * 100 if current_price else 0.0

    if delta > 10 and score >= 60:
        action = "BUY"
        reasoning = f"Target price indicates {delta:.1f}% upside potential"
    elif delta > 20 and score >= 40:
        action = "STRONG_BUY"
        reasoning = f"Strong upside potential of {delta:.1f}%"
    elif delta < -10 and score >= 60:
        action = "SELL"
        reasoning = f"Target price indicates {abs(delta):.1f}% downside risk"
    elif delta < -20 and score >= 40:
        action = "STRONG_SELL"
        reasoning = f"Significant downside risk of {abs(delta):.1f}%"
    else:
        action = "HOLD"
        reasoning = "Target price close to current price"

    return Recommendation(action=action, reasoning=reasoning, expected_return=delta)
