# errors.py
"""
Recoverable error conditions raised by the balance core.
None of them are fatal: the HTTP layer reports them as a status message
and keeps the workout session alive.
"""


class BalanceError(Exception):
    """Base class for all balance core errors"""


class InvalidReading(BalanceError):
    """A reading is non-finite, outside [0, 100], or out of timestamp order"""


class SensorUnavailable(BalanceError):
    """The sensor feed produced no reading before the timeout expired"""


class CapacityExceeded(BalanceError):
    """The history store reached its configured maximum size"""
