import asyncio
from functools import partial
from typing import Optional

from beam_coach.config import config
from beam_coach.models.errors import BalanceError
from beam_coach.models.workout_session import WorkoutSession
from beam_coach.services.sample_service import SensorSampleGenerator
from beam_coach.utils.logging_utils import logger


class WorkoutTimer:
    """
    Recurring asyncio task that ticks a workout session at a fixed cadence.
    Ticks run in a worker thread so a sensor wait never blocks the event loop.
    """

    def __init__(self, session: WorkoutSession, interval: float = None):
        self.session = session
        self.interval = config.tick_interval if interval is None else interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        """Schedule the tick loop on the running event loop"""
        if self.running:
            return
        self.session.is_active = True
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"Workout timer started ({self.interval}s interval) for {self.session.exercise}")

    async def stop(self):
        """
        Cancel the tick loop and wait until no tick is in flight.
        No sample is stored for this session by the timer after stop() returns.
        """
        self.session.is_active = False
        if self._task is None:
            return

        sensor = self.session.generator if isinstance(self.session.generator, SensorSampleGenerator) else None
        if sensor is not None:
            sensor.cancel()

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

        # The worker thread outlives the cancelled task until its tick returns
        await asyncio.to_thread(self.session.wait_idle)
        if sensor is not None:
            sensor.resume()
        logger.info(f"Workout timer stopped after {self.session.tick_count} ticks")

    async def _run(self):
        while True:
            try:
                await asyncio.to_thread(partial(self.session.tick, only_if_active=True))
            except BalanceError:
                # Already recorded on the session; keep ticking
                pass
            except Exception as e:
                logger.error(f"Unexpected error during timed tick: {e}")
            await asyncio.sleep(self.interval)
