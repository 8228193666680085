# balance_history.py
"""
Append-only, in-memory history of balance samples for one workout session.

Writers are serialized by a lock so insertion order is a total order that
agrees with timestamp order. Readers get a snapshot bounded by the length at
call time; since stored entries are never replaced, iterating that prefix
later still yields exactly what was there when the snapshot was taken.

Listeners are called outside the store lock, one drainer at a time, in
insertion order.
"""

import threading
from collections import deque
from datetime import datetime
from itertools import islice
from typing import Callable, Iterable, Iterator, List, Optional

from beam_coach.models.balance import BalanceSample, as_utc
from beam_coach.models.errors import CapacityExceeded, InvalidReading
from beam_coach.utils.logging_utils import logger

HistoryListener = Callable[[BalanceSample], None]


class HistorySnapshot:
    """
    Lazy, restartable view over the first `length` samples of a history.
    Every iteration starts again from the beginning.
    """

    def __init__(self, samples: List[BalanceSample], length: int):
        self._samples = samples
        self._length = length

    def __iter__(self) -> Iterator[BalanceSample]:
        return islice(self._samples, self._length)

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: int) -> BalanceSample:
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("history snapshot index out of range")
        return self._samples[index]

    def __repr__(self):
        return f"HistorySnapshot(length={self._length})"


class BalanceHistory:
    """
    Ordered sample store owned by a single session.
    Supports append, bulk seed, snapshot reads and change callbacks. There is
    no way to remove or replace an entry.
    """

    def __init__(self, capacity: Optional[int] = None):
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._samples: List[BalanceSample] = []
        self._lock = threading.Lock()
        self._listeners: List[HistoryListener] = []
        self._pending = deque()  # Stored but not yet announced, in insertion order
        self._notify_lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._samples)

    def _check_room(self, extra: int):
        if self.capacity is not None and len(self._samples) + extra > self.capacity:
            raise CapacityExceeded(
                f"history holds {len(self._samples)} of {self.capacity} samples, cannot add {extra}"
            )

    def _check_order(self, sample: BalanceSample, previous: Optional[BalanceSample]):
        if previous is not None and sample.timestamp < previous.timestamp:
            raise InvalidReading(
                f"sample at {sample.timestamp.isoformat()} is older than last entry "
                f"at {previous.timestamp.isoformat()}"
            )

    def append(self, sample: BalanceSample):
        """Add one sample at the end of the history"""
        with self._lock:
            self._check_room(1)
            self._check_order(sample, self._samples[-1] if self._samples else None)
            self._samples.append(sample)
            self._pending.append(sample)

        self._drain()

    def seed(self, samples: Iterable[BalanceSample]):
        """
        Bulk-initialize with precomputed samples (used for demo history).
        Entries are stored in chronological order; either all of them are
        stored or none are.
        """
        ordered = sorted(samples, key=lambda s: s.timestamp)
        if not ordered:
            return

        with self._lock:
            self._check_room(len(ordered))
            self._check_order(ordered[0], self._samples[-1] if self._samples else None)
            self._samples.extend(ordered)
            self._pending.extend(ordered)

        logger.info(f"Seeded history with {len(ordered)} samples")
        self._drain()

    def all(self) -> HistorySnapshot:
        """Snapshot of every sample stored so far, in insertion order"""
        with self._lock:
            return HistorySnapshot(self._samples, len(self._samples))

    def since(self, cutoff: datetime) -> List[BalanceSample]:
        """Samples with timestamp >= cutoff, oldest first"""
        cutoff = as_utc(cutoff)
        return [s for s in self.all() if s.timestamp >= cutoff]

    def latest(self) -> Optional[BalanceSample]:
        with self._lock:
            return self._samples[-1] if self._samples else None

    def subscribe(self, listener: HistoryListener):
        """Register a callback invoked with each newly stored sample"""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: HistoryListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _drain(self):
        """Announce pending samples to listeners in the order they were stored"""
        with self._notify_lock:
            while True:
                try:
                    sample = self._pending.popleft()
                except IndexError:
                    return
                for listener in list(self._listeners):
                    try:
                        listener(sample)
                    except Exception as e:
                        logger.error(f"History listener {listener!r} failed: {e}")
