import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from .database import Base


def generate_appointment_id():
    """Generate an appointment ID when the booking client does not supply one"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), default="user", nullable=False)  # user, admin
    created_at = Column(DateTime, server_default=func.now())


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # Finance rollups filter on status and a date range
        Index("ix_appointments_status_date", "status", "date"),
    )

    id = Column(String(64), primary_key=True, default=generate_appointment_id)
    user_email = Column(String(255), index=True, nullable=False)
    service_name = Column("serviceName", String(255), nullable=False)
    date = Column(Date, nullable=False)
    time = Column(String(5), nullable=False)  # HH:MM
    status = Column(
        String(20), default="pending", nullable=False
    )  # pending, confirmed, finished, canceled, erased
    price = Column(Float, default=0.0, nullable=False)  # Fixed at booking time
    created_at = Column(DateTime, server_default=func.now())


class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (
        # mark_read flips unread messages of one sender in one thread
        Index("ix_messages_thread_unread", "user_email", "sender", "is_read"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_email = Column(String(255), index=True, nullable=False)
    sender = Column(String(16), nullable=False)  # user, admin
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), index=True)
    is_read = Column(Boolean, default=False, nullable=False)
