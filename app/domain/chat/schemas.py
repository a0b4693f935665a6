"""Chat domain schemas - REST bodies and Socket.IO event payloads"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, field_validator


class MessageSender(str, Enum):
    USER = "user"
    ADMIN = "admin"


class MessageCreate(BaseModel):
    """Body of POST /chat and payload of the send_message event"""

    email: str
    content: str
    sender: MessageSender = MessageSender.USER
    # Temporary id the sender rendered optimistically; echoed back untouched
    clientId: Optional[Union[int, str]] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("email is required")
        return v

    @field_validator("content")
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError("content must not be empty")
        return v


class MarkReadRequest(BaseModel):
    """Payload of the mark_read event"""

    userEmail: str
    actor: MessageSender

    @field_validator("userEmail")
    @classmethod
    def validate_user_email(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("userEmail is required")
        return v


class ChatMessageResponse(BaseModel):
    id: int
    user_email: str
    sender: MessageSender
    content: str
    created_at: Optional[datetime] = None
    is_read: bool

    class Config:
        from_attributes = True


class NewMessageEvent(BaseModel):
    id: int
    user_email: str
    sender: MessageSender
    content: str
    created_at: Optional[str] = None
    client_id: Optional[Union[int, str]] = None


class SendAck(BaseModel):
    """Acknowledgement returned to the sending connection only"""

    id: int
    client_id: Optional[Union[int, str]] = None
    created_at: Optional[str] = None


class ReadReceiptEvent(BaseModel):
    readerEmail: str
    readByUserEmail: str
    actor: MessageSender
    timestamp: str


class ErrorEvent(BaseModel):
    message: str
    error: str


class ChatSummary(BaseModel):
    """One row of the admin conversation list"""

    email: str
    name: Optional[str] = None
    lastMessage: Optional[str] = None
    lastMessageTime: Optional[datetime] = None
    unreadCount: int = 0
    unread: bool = False
