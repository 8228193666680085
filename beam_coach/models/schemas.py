# schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from beam_coach.models.balance import BalanceSample
from beam_coach.models.catalog import Exercise


class BalanceSampleModel(BaseModel):
    """One stored balance sample as sent to the client"""
    timestamp: datetime
    leftSide: float
    rightSide: float
    exercise: str

    @classmethod
    def from_sample(cls, sample: BalanceSample) -> "BalanceSampleModel":
        return cls(
            timestamp=sample.timestamp,
            leftSide=sample.left_side,
            rightSide=sample.right_side,
            exercise=sample.exercise_label
        )


class ExerciseModel(BaseModel):
    name: str
    description: str
    muscleGroups: List[str] = []

    @classmethod
    def from_exercise(cls, exercise: Exercise) -> "ExerciseModel":
        return cls(
            name=exercise.name,
            description=exercise.description,
            muscleGroups=list(exercise.muscle_groups)
        )


class WorkoutState(BaseModel):
    """
    Pydantic model representing the live workout state returned to clients.
    Contains the latest readings, feedback tier, and session status.
    """
    exercise: str = ""                          # Exercise being performed
    leftSide: Optional[float] = None            # Latest left-side force (%)
    rightSide: Optional[float] = None           # Latest right-side force (%)
    tier: Optional[str] = None                  # BALANCED / SLIGHT_IMBALANCE / SIGNIFICANT_IMBALANCE
    feedback: Optional[str] = None              # Feedback message for the tier
    feedbackColor: Optional[str] = None         # green / yellow / red
    status: str = "Ready to start!"            # Status line for the user
    isWorkoutActive: bool = False              # Whether the timer is ticking
    errorMessage: Optional[str] = None         # Recoverable error from the last tick
    samplesRecorded: int = 0                   # Samples stored in the session history
    lastSampleAt: int = 0                      # Timestamp of last sample (milliseconds)


class HistoryResponse(BaseModel):
    timeRange: str = "all"
    count: int = 0
    samples: List[BalanceSampleModel] = []
