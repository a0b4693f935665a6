"""Appointment repository - Database operations for appointments"""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Appointment
from .status import COMPLETED_STATUSES, INACTIVE_STATUSES, AppointmentStatus


def _values(statuses) -> list[str]:
    return [s.value for s in statuses]


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise

    @staticmethod
    def get_appointments(db: Session, status: Optional[str] = None) -> list[Appointment]:
        """All appointments, newest booking first"""
        query = db.query(Appointment)
        if status:
            query = query.filter(Appointment.status == status)
        return query.order_by(Appointment.created_at.desc(), Appointment.date.desc()).all()

    @staticmethod
    def get_appointments_for_user(db: Session, user_email: str) -> list[Appointment]:
        """A client's appointments by date, soft-deleted ones excluded"""
        return (
            db.query(Appointment)
            .filter(
                Appointment.user_email == user_email,
                Appointment.status != AppointmentStatus.ERASED.value,
            )
            .order_by(Appointment.date.desc(), Appointment.time.desc())
            .all()
        )

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: str) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_booked_times(db: Session, on_date: date) -> list[str]:
        """Times already taken on a date by appointments that still hold their slot"""
        rows = (
            db.query(Appointment.time)
            .filter(
                Appointment.date == on_date,
                Appointment.status.notin_(_values(INACTIVE_STATUSES)),
            )
            .order_by(Appointment.time.asc())
            .all()
        )
        return [row.time for row in rows]

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        AppointmentRepository._commit(db)
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_status(db: Session, appointment: Appointment, status: str) -> Appointment:
        appointment.status = status
        AppointmentRepository._commit(db)
        db.refresh(appointment)
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        """Permanently remove an appointment"""
        db.delete(appointment)
        AppointmentRepository._commit(db)

    @staticmethod
    def get_completed_totals(db: Session, start: date, end: date) -> tuple[float, int]:
        """
        Sum of price and number of completed appointments dated in [start, end].
        Uses the (status, date) index.
        """
        total, count = (
            db.query(func.coalesce(func.sum(Appointment.price), 0.0), func.count(Appointment.id))
            .filter(
                Appointment.status.in_(_values(COMPLETED_STATUSES)),
                Appointment.date >= start,
                Appointment.date <= end,
            )
            .one()
        )
        return float(total or 0.0), int(count or 0)
