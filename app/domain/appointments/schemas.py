"""Appointment domain schemas - Pydantic models for validation"""

import re
from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .status import AppointmentStatus

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class AppointmentCreate(BaseModel):
    """Schema for booking a new appointment"""

    id: Optional[str] = None
    user_email: str
    serviceName: str
    date: date_type
    time: str
    price: float = Field(0.0, ge=0)

    @field_validator("user_email", "serviceName")
    @classmethod
    def validate_required(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("field is required")
        return v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        if not TIME_PATTERN.match(v):
            raise ValueError("time must be HH:MM")
        return v


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class SelfCancelRequest(BaseModel):
    """Schema for a client cancelling their own appointment"""

    email: str


class AppointmentResponse(BaseModel):
    id: str
    user_email: str
    serviceName: str
    date: date_type
    time: str
    status: AppointmentStatus
    price: float
    created_at: Optional[datetime] = None


class AppointmentActionResponse(BaseModel):
    message: str
    appointment: AppointmentResponse


class BookedTime(BaseModel):
    time: str
