import queue
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

import numpy as np

from beam_coach.config import config, Config
from beam_coach.models.balance import BalanceSample
from beam_coach.models.errors import SensorUnavailable
from beam_coach.utils.logging_utils import logger


class SampleGenerator(ABC):
    """
    Source of balance samples. One call produces exactly one sample; the
    caller decides whether to store it.
    """

    @abstractmethod
    def generate_sample(self, exercise_label: str, now: datetime) -> BalanceSample:
        """Produce one BalanceSample stamped with `now`"""
        pass


class SimulatedSampleGenerator(SampleGenerator):
    """
    Stand-in for a real sensor feed.
    Draws each side independently and uniformly from [low, high]; pass a seed
    for a reproducible stream.
    """

    def __init__(self, low: float = None, high: float = None, seed: Optional[int] = None):
        self.low = config.sample_low if low is None else low
        self.high = config.sample_high if high is None else high
        if self.low > self.high:
            raise ValueError(f"low bound {self.low} exceeds high bound {self.high}")
        self.seed = seed
        self.rng = np.random.default_rng(seed)

    def generate_sample(self, exercise_label: str, now: datetime) -> BalanceSample:
        left, right = self.rng.uniform(self.low, self.high, size=2)
        return BalanceSample(
            timestamp=now,
            left_side=float(left),
            right_side=float(right),
            exercise_label=exercise_label
        )


class SensorSampleGenerator(SampleGenerator):
    """
    Adapter for a real bilateral force sensor.
    The device driver pushes readings in; generate_sample waits a bounded
    time for the next one and raises SensorUnavailable when none arrives or
    the wait was cancelled.
    """

    def __init__(self, timeout: float = None):
        self.timeout = config.sensor_timeout if timeout is None else timeout
        self._readings: queue.Queue = queue.Queue()
        self._cancelled = threading.Event()

    def push(self, left_side: float, right_side: float):
        """Feed one reading from the device"""
        self._readings.put((float(left_side), float(right_side)))

    def cancel(self):
        """Abort any pending and future waits"""
        self._cancelled.set()
        # Wake a waiter blocked in get()
        self._readings.put(None)

    def resume(self):
        """Accept waits again, dropping wake-up markers left by cancel()"""
        pending = []
        while True:
            try:
                reading = self._readings.get_nowait()
            except queue.Empty:
                break
            if reading is not None:
                pending.append(reading)
        for reading in pending:
            self._readings.put(reading)
        self._cancelled.clear()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def generate_sample(self, exercise_label: str, now: datetime) -> BalanceSample:
        if self._cancelled.is_set():
            raise SensorUnavailable("sensor wait was cancelled")

        try:
            reading = self._readings.get(timeout=self.timeout)
        except queue.Empty:
            logger.warning(f"No sensor reading within {self.timeout}s")
            raise SensorUnavailable(f"no sensor reading within {self.timeout}s")

        if reading is None or self._cancelled.is_set():
            raise SensorUnavailable("sensor wait was cancelled")

        left, right = reading
        return BalanceSample(
            timestamp=now,
            left_side=left,
            right_side=right,
            exercise_label=exercise_label
        )


def create_generator(cfg: Config = None) -> SampleGenerator:
    """
    Factory selecting the sample source from configuration.
    Unknown sources fall back to the unseeded simulation.
    """
    cfg = cfg or config

    if cfg.sample_source == "sensor":
        generator = SensorSampleGenerator(timeout=cfg.sensor_timeout)
    elif cfg.sample_source == "seeded":
        seed = cfg.sample_seed if cfg.sample_seed is not None else 0
        generator = SimulatedSampleGenerator(cfg.sample_low, cfg.sample_high, seed=seed)
    else:
        if cfg.sample_source != "simulated":
            logger.warning(f"Unknown sample source '{cfg.sample_source}', defaulting to simulated")
        generator = SimulatedSampleGenerator(cfg.sample_low, cfg.sample_high, seed=cfg.sample_seed)

    logger.info(f"Initialized {type(generator).__name__} for source: {cfg.sample_source}")
    return generator


def create_demo_generator(cfg: Config = None) -> SimulatedSampleGenerator:
    """
    Simulated generator for demo history. Follows the configured seed, so a
    seeded run also reproduces its pre-populated week.
    """
    cfg = cfg or config

    seed = cfg.sample_seed
    if seed is None and cfg.sample_source == "seeded":
        seed = 0
    return SimulatedSampleGenerator(cfg.sample_low, cfg.sample_high, seed=seed)
