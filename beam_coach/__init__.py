"""BEAM balance coach: bilateral balance feedback and workout history."""

from beam_coach.models.balance import BalanceSample, FeedbackTier
from beam_coach.models.balance_evaluator import BalanceEvaluator, evaluate
from beam_coach.models.balance_history import BalanceHistory
from beam_coach.models.errors import BalanceError, CapacityExceeded, InvalidReading, SensorUnavailable
