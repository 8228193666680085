# workout_session.py
"""
Workout session that ties the balance pieces together.
Owns one history and delegates sample production and classification to the
generator and evaluator it was given; a tick is generate -> evaluate -> append.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from beam_coach.config import config
from beam_coach.models.balance import BalanceSample, FeedbackTier
from beam_coach.models.balance_evaluator import BalanceEvaluator
from beam_coach.models.balance_history import BalanceHistory
from beam_coach.models.errors import BalanceError
from beam_coach.services.sample_service import SampleGenerator, create_demo_generator, create_generator
from beam_coach.utils.logging_utils import logger


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick: the stored sample and its classification"""
    sample: BalanceSample
    tier: FeedbackTier
    message: str


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_demo_samples(days: int = None, exercise_label: str = None,
                       generator: SampleGenerator = None, today: datetime = None):
    """
    Synthetic daily history used to pre-populate a new session: one sample per
    day from today back to (days - 1) days ago.
    """
    days = config.demo_history_days if days is None else days
    exercise_label = exercise_label or config.demo_exercise
    generator = generator or create_demo_generator()
    today = today or utc_now()

    return [
        generator.generate_sample(exercise_label, today - timedelta(days=i))
        for i in range(days)
    ]


class WorkoutSession:
    """
    Per-workout context. The history is passed in explicitly (or created
    fresh) so that whichever component needs it gets the same reference.
    """

    def __init__(self, exercise: str,
                 history: Optional[BalanceHistory] = None,
                 generator: Optional[SampleGenerator] = None,
                 evaluator: Optional[BalanceEvaluator] = None):
        self.exercise = exercise
        self.history = history if history is not None else BalanceHistory(capacity=config.history_capacity)
        self.generator = generator or create_generator()
        self.evaluator = evaluator or BalanceEvaluator()

        self.is_active = False
        self.tick_count = 0
        self.last_result: Optional[TickResult] = None
        self.last_error: Optional[BalanceError] = None
        self._tick_lock = threading.Lock()  # One producer at a time keeps timestamps ordered

        logger.info(f"WorkoutSession initialized for exercise: {exercise}")

    def seed_demo_history(self, days: int = None, today: datetime = None):
        """Pre-populate the history with synthetic daily entries"""
        self.history.seed(build_demo_samples(days=days, today=today))

    def tick(self, now: Optional[datetime] = None, only_if_active: bool = False) -> Optional[TickResult]:
        """
        Produce, classify and store one sample.
        BalanceError subclasses are recorded in last_error and re-raised so
        the caller can surface them as a status message. With only_if_active,
        a sample produced after the workout was stopped is dropped and None
        is returned.
        """
        with self._tick_lock:
            try:
                sample = self.generator.generate_sample(self.exercise, now or utc_now())
                tier, message = self.evaluator.evaluate(sample.left_side, sample.right_side)
                if only_if_active and not self.is_active:
                    logger.info(f"Dropped sample for {self.exercise}: workout already stopped")
                    return None
                self.history.append(sample)
            except BalanceError as e:
                self.last_error = e
                logger.warning(f"Tick failed for {self.exercise}: {type(e).__name__}: {e}")
                raise

            self.tick_count += 1
            self.last_error = None
            self.last_result = TickResult(sample=sample, tier=tier, message=message)

        logger.info(
            f"Tick #{self.tick_count} - {self.exercise}: L={sample.left_side:.1f}% "
            f"R={sample.right_side:.1f}% -> {tier.name}"
        )
        return self.last_result

    def wait_idle(self):
        """Block until no tick is in progress"""
        with self._tick_lock:
            pass

    def switch_exercise(self, new_exercise: str):
        """Subsequent samples are labelled with the new exercise; history is kept"""
        if new_exercise != self.exercise:
            self.exercise = new_exercise
            logger.info(f"Switched to {new_exercise}")

    def get_status(self) -> Dict[str, Any]:
        """Get session status for debugging"""
        return {
            "exercise": self.exercise,
            "is_active": self.is_active,
            "tick_count": self.tick_count,
            "history_size": len(self.history),
            "last_tier": self.last_result.tier.name if self.last_result else None,
            "last_error": str(self.last_error) if self.last_error else None
        }
