# balance.py
"""
Core balance data types: a single timestamped left/right sample and the
feedback tier derived from it.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any

from beam_coach.models.errors import InvalidReading


class FeedbackTier(Enum):
    """
    Discrete classification of how imbalanced a sample is.
    Each member carries (severity, message, color); severity gives the ordering.
    """
    BALANCED = (0, "Great balance! Keep it up!", "green")
    SLIGHT_IMBALANCE = (1, "Slight imbalance detected. Try to maintain even force.", "yellow")
    SIGNIFICANT_IMBALANCE = (2, "Significant imbalance detected. Please adjust your form.", "red")

    def __init__(self, severity: int, message: str, color: str):
        self.severity = severity
        self.message = message
        self.color = color

    def __lt__(self, other):
        if not isinstance(other, FeedbackTier):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other):
        if not isinstance(other, FeedbackTier):
            return NotImplemented
        return self.severity <= other.severity


def as_utc(timestamp: datetime) -> datetime:
    """
    Normalise a timestamp to aware UTC.
    Naive datetimes are taken as local time, the way datetime.now() returns them.
    """
    if not isinstance(timestamp, datetime):
        raise InvalidReading(f"timestamp is not a datetime: {timestamp!r}")
    return timestamp.astimezone(timezone.utc)


@dataclass(frozen=True)
class BalanceSample:
    """One observation of left/right force percentages during an exercise"""
    timestamp: datetime
    left_side: float
    right_side: float
    exercise_label: str

    def __post_init__(self):
        # Stored timestamps are always aware UTC so they stay comparable
        object.__setattr__(self, "timestamp", as_utc(self.timestamp))

    @property
    def difference(self) -> float:
        return abs(self.left_side - self.right_side)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "leftSide": self.left_side,
            "rightSide": self.right_side,
            "exercise": self.exercise_label
        }
