"""Appointments domain - Bookings and their status lifecycle"""

from .router import router
from .status import AppointmentStatus

__all__ = ["router", "AppointmentStatus"]
