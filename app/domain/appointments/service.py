"""Appointment service - Business logic for bookings and status changes"""

import logging
from datetime import date, datetime, time
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment
from .repository import AppointmentRepository
from .schemas import AppointmentCreate
from .status import (
    CLIENT_CANCELLABLE_STATUSES,
    AppointmentStatus,
    validate_status_transition,
)

logger = logging.getLogger(__name__)


def appointment_starts_at(appointment: Appointment) -> datetime:
    hours, minutes = (int(part) for part in appointment.time.split(":"))
    return datetime.combine(appointment.date, time(hours, minutes))


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()

    def get_appointments(self, status: Optional[AppointmentStatus] = None) -> list[Appointment]:
        """Admin view: every appointment, soft-deleted ones included"""
        return self.repo.get_appointments(self.db, status.value if status else None)

    def get_user_appointments(self, user_email: str) -> list[Appointment]:
        return self.repo.get_appointments_for_user(self.db, user_email)

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def get_booked_times(self, on_date: date) -> list[str]:
        return self.repo.get_booked_times(self.db, on_date)

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """Book an appointment; it always starts pending and the price is frozen as given"""
        if data.id and self.repo.get_appointment_by_id(self.db, data.id):
            raise HTTPException(status_code=409, detail="Appointment already exists")

        appointment_data = {
            "user_email": data.user_email,
            "service_name": data.serviceName,
            "date": data.date,
            "time": data.time,
            "status": AppointmentStatus.PENDING.value,
            "price": data.price,
        }
        if data.id:
            appointment_data["id"] = data.id

        appointment = self.repo.create_appointment(self.db, **appointment_data)
        logger.info(f"📅 Appointment {appointment.id} booked for {appointment.user_email}")
        return appointment

    def set_status(self, appointment_id: str, new_status: AppointmentStatus) -> Appointment:
        """Apply an admin status change. Re-applying the current status is a no-op."""
        appointment = self.get_appointment(appointment_id)
        current_status = appointment.status

        if current_status == new_status.value:
            logger.debug(f"Appointment {appointment_id} already {current_status}")
            return appointment

        if not validate_status_transition(current_status, new_status.value):
            logger.warning(
                f"⚠️ Rejected transition for appointment {appointment_id}: "
                f"{current_status} → {new_status.value}"
            )
            raise HTTPException(
                status_code=409,
                detail=f"Cannot change status from '{current_status}' to '{new_status.value}'",
            )

        appointment = self.repo.update_status(self.db, appointment, new_status.value)
        logger.info(
            f"✅ Appointment {appointment_id} transitioned: {current_status} → {new_status.value}"
        )
        return appointment

    def soft_delete(self, appointment_id: str) -> Appointment:
        """Erase an appointment from the UI while keeping it on record"""
        return self.set_status(appointment_id, AppointmentStatus.ERASED)

    def purge(self, appointment_id: str) -> dict:
        """Administrative hard delete"""
        appointment = self.get_appointment(appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"🗑️ Appointment {appointment_id} permanently deleted")
        return {"message": "Appointment permanently deleted"}

    def cancel_own(
        self, appointment_id: str, user_email: str, now: Optional[datetime] = None
    ) -> Appointment:
        """
        Client-initiated cancellation.

        Only the owner may cancel, and only while the appointment is still
        upcoming and pending or confirmed.
        """
        appointment = self.get_appointment(appointment_id)

        if appointment.user_email.lower() != user_email.strip().lower():
            raise HTTPException(status_code=403, detail="You can only cancel your own appointments")

        if appointment.status == AppointmentStatus.CANCELED.value:
            return appointment

        if appointment.status not in [s.value for s in CLIENT_CANCELLABLE_STATUSES]:
            raise HTTPException(
                status_code=409,
                detail=f"Appointments with status '{appointment.status}' cannot be cancelled",
            )

        now = now or datetime.now()
        if appointment_starts_at(appointment) < now:
            raise HTTPException(status_code=409, detail="Past appointments cannot be cancelled")

        appointment = self.repo.update_status(
            self.db, appointment, AppointmentStatus.CANCELED.value
        )
        logger.info(f"Appointment {appointment_id} cancelled by {user_email}")
        return appointment
