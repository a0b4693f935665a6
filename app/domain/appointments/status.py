"""
Appointment status lifecycle

Statuses: pending → confirmed → finished, with canceled and erased as exits.
'erased' is the soft-delete status: the row stays for history but is hidden
from the client and frozen for further changes.
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FINISHED = "finished"
    CANCELED = "canceled"
    ERASED = "erased"


# Statuses that count as income
COMPLETED_STATUSES = (AppointmentStatus.FINISHED,)

# Statuses that free the time slot
INACTIVE_STATUSES = (AppointmentStatus.CANCELED, AppointmentStatus.ERASED)

# Statuses a client may still cancel
CLIENT_CANCELLABLE_STATUSES = (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)

VALID_TRANSITIONS = {
    AppointmentStatus.PENDING: [
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.CANCELED,
        AppointmentStatus.ERASED,
    ],
    AppointmentStatus.CONFIRMED: [
        AppointmentStatus.FINISHED,
        AppointmentStatus.CANCELED,
        AppointmentStatus.ERASED,
    ],
    AppointmentStatus.FINISHED: [AppointmentStatus.ERASED],
    AppointmentStatus.CANCELED: [AppointmentStatus.ERASED],
    AppointmentStatus.ERASED: [],  # Terminal state
}


def validate_status_transition(current_status: str, new_status: str) -> bool:
    """
    Check whether an appointment may move from `current_status` to `new_status`.
    Re-applying the current status is always allowed (no-op).
    """
    if current_status == new_status:
        return True

    try:
        current = AppointmentStatus(current_status)
        target = AppointmentStatus(new_status)
    except ValueError:
        return False

    return target in VALID_TRANSITIONS[current]
