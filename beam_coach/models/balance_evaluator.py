# balance_evaluator.py
"""
Bilateral balance evaluator.
Classifies a left/right reading pair by the absolute difference between sides.
Thresholds are inclusive on the upper tier: a difference of exactly 10 is a
slight imbalance, exactly 20 is significant.
"""

from typing import Tuple
import numpy as np
from beam_coach.config import config
from beam_coach.models.balance import FeedbackTier
from beam_coach.models.errors import InvalidReading


class BalanceEvaluator:
    """
    Stateless classifier for balance readings.
    Thresholds default to the configured values (10 and 20 percentage points).
    """

    def __init__(self, slight_threshold: float = None, significant_threshold: float = None):
        if slight_threshold is None:
            slight_threshold = config.slight_imbalance_threshold
        if significant_threshold is None:
            significant_threshold = config.significant_imbalance_threshold

        if slight_threshold > significant_threshold:
            raise ValueError(
                f"slight threshold {slight_threshold} exceeds significant threshold {significant_threshold}"
            )

        self.slight_threshold = slight_threshold
        self.significant_threshold = significant_threshold

    @staticmethod
    def validate(value: float, side: str) -> float:
        """Reject non-finite and out-of-domain percentages"""
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidReading(f"{side} reading is not numeric: {value!r}")

        if not np.isfinite(value):
            raise InvalidReading(f"{side} reading is not finite: {value}")
        if value < 0.0 or value > 100.0:
            raise InvalidReading(f"{side} reading {value} is outside [0, 100]")
        return value

    def classify(self, left_side: float, right_side: float) -> FeedbackTier:
        left_side = self.validate(left_side, "left")
        right_side = self.validate(right_side, "right")

        difference = abs(left_side - right_side)
        if difference < self.slight_threshold:
            return FeedbackTier.BALANCED
        elif difference < self.significant_threshold:
            return FeedbackTier.SLIGHT_IMBALANCE
        return FeedbackTier.SIGNIFICANT_IMBALANCE

    def evaluate(self, left_side: float, right_side: float) -> Tuple[FeedbackTier, str]:
        """Return (tier, display message) for a reading pair"""
        tier = self.classify(left_side, right_side)
        return tier, tier.message


# Default evaluator with the stock thresholds
default_evaluator = BalanceEvaluator()


def evaluate(left_side: float, right_side: float) -> Tuple[FeedbackTier, str]:
    return default_evaluator.evaluate(left_side, right_side)
