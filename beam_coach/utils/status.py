# status.py
from typing import Optional

from beam_coach.models.errors import BalanceError, CapacityExceeded, InvalidReading, SensorUnavailable


def get_status_text(error: Optional[BalanceError], is_active: bool = True) -> str:
    """
    Turn a recoverable balance error into a short message the app can show.
    Returns a ready/idle message when there is no error.
    """

    status_messages = {
        InvalidReading: "Reading could not be used. Check the sensor placement.",
        SensorUnavailable: "Sensor not responding. Make sure it is connected.",
        CapacityExceeded: "Session history is full. Start a new session to keep recording."
    }

    if error is None:
        return "Recording balance..." if is_active else "Ready to start!"

    for error_type, message in status_messages.items():
        if isinstance(error, error_type):
            return message

    return f"Balance error: {error}"
