"""Appointment router - FastAPI endpoints for bookings and status changes"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Appointment
from ...schemas import MessageResponse
from .schemas import (
    AppointmentActionResponse,
    AppointmentCreate,
    AppointmentResponse,
    AppointmentStatusUpdate,
    BookedTime,
    SelfCancelRequest,
)
from .service import AppointmentService
from .status import AppointmentStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


def to_response(appointment: Appointment) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        user_email=appointment.user_email,
        serviceName=appointment.service_name,
        date=appointment.date,
        time=appointment.time,
        status=appointment.status,
        price=appointment.price,
        created_at=appointment.created_at,
    )


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment"""
    return to_response(service.create_appointment(data))


@router.get("", response_model=list[AppointmentResponse])
async def get_appointments(
    status: Optional[AppointmentStatus] = Query(None, description="Filter by status"),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get all appointments (admin), soft-deleted ones included"""
    return [to_response(a) for a in service.get_appointments(status)]


# Declared before /{email} so "by-date" is not read as an email
@router.get("/by-date/{on_date}", response_model=list[BookedTime])
async def get_booked_times(
    on_date: date,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Times already taken on a date (canceled and erased appointments free their slot)"""
    return [BookedTime(time=t) for t in service.get_booked_times(on_date)]


@router.get("/{email}", response_model=list[AppointmentResponse])
async def get_user_appointments(
    email: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Get a client's appointments"""
    return [to_response(a) for a in service.get_user_appointments(email)]


@router.patch("/{appointment_id}/status", response_model=AppointmentActionResponse)
async def update_appointment_status(
    appointment_id: str,
    data: AppointmentStatusUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Change an appointment's status (admin)"""
    appointment = service.set_status(appointment_id, data.status)
    return AppointmentActionResponse(
        message=f"Appointment status updated to '{appointment.status}'",
        appointment=to_response(appointment),
    )


@router.post("/{appointment_id}/cancel", response_model=AppointmentActionResponse)
async def cancel_own_appointment(
    appointment_id: str,
    data: SelfCancelRequest,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Client cancels one of their own upcoming appointments"""
    appointment = service.cancel_own(appointment_id, data.email)
    return AppointmentActionResponse(
        message="Appointment cancelled", appointment=to_response(appointment)
    )


@router.delete("/{appointment_id}/purge", response_model=MessageResponse)
async def purge_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Permanently delete an appointment (administrative purge)"""
    return service.purge(appointment_id)


@router.delete("/{appointment_id}", response_model=AppointmentActionResponse)
async def delete_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Soft delete: the appointment is marked erased and kept on record"""
    appointment = service.soft_delete(appointment_id)
    return AppointmentActionResponse(
        message="Appointment erased", appointment=to_response(appointment)
    )
