"""Chat service - Business logic for messaging and read receipts"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Message
from .repository import MessageRepository
from .rooms import ADMIN_ROOM, Room, UserRoom
from .schemas import (
    ChatSummary,
    MessageCreate,
    MessageSender,
    NewMessageEvent,
    ReadReceiptEvent,
)

logger = logging.getLogger(__name__)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def counterpart_of(actor: MessageSender) -> MessageSender:
    """The sender whose messages `actor` reads"""
    return MessageSender.ADMIN if actor == MessageSender.USER else MessageSender.USER


def build_new_message_event(message: Message, client_id=None) -> NewMessageEvent:
    return NewMessageEvent(
        id=message.id,
        user_email=message.user_email,
        sender=message.sender,
        content=message.content,
        created_at=_isoformat(message.created_at),
        client_id=client_id,
    )


def build_read_receipt(
    user_email: str, actor: MessageSender, now: Optional[datetime] = None
) -> tuple[Room, ReadReceiptEvent]:
    """
    Receipt for a bulk mark-read and the room it goes to.

    A client reading admin messages notifies the admin room; an admin reading
    a client's messages notifies that client's room.
    """
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    if actor == MessageSender.USER:
        return ADMIN_ROOM, ReadReceiptEvent(
            readerEmail=user_email,
            readByUserEmail="admin",
            actor=MessageSender.USER,
            timestamp=timestamp,
        )
    return UserRoom(email=user_email), ReadReceiptEvent(
        readerEmail="admin",
        readByUserEmail=user_email,
        actor=MessageSender.ADMIN,
        timestamp=timestamp,
    )


class ChatService:
    """Service layer for chat messages"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = MessageRepository()

    def get_thread(self, user_email: str) -> list[Message]:
        return self.repo.get_thread(self.db, user_email)

    def send_message(self, data: MessageCreate) -> Message:
        """Persist a message. Callers broadcast only after this returns."""
        message = self.repo.create_message(
            self.db, user_email=data.email, sender=data.sender.value, content=data.content
        )
        logger.info(f"💬 Message {message.id} stored for thread {message.user_email} ({message.sender})")
        return message

    def mark_read(self, user_email: str, actor: MessageSender) -> int:
        """Mark the counterpart's unread messages in the thread as read"""
        updated = self.repo.mark_thread_read(self.db, user_email, counterpart_of(actor).value)
        logger.info(f"✅ {updated} message(s) in thread {user_email} marked read by {actor.value}")
        return updated

    def list_threads(self) -> list[ChatSummary]:
        """Conversation list for the admin inbox"""
        summaries = []
        for message, name, unread_count in self.repo.get_thread_summaries(self.db):
            unread_count = int(unread_count or 0)
            summaries.append(
                ChatSummary(
                    email=message.user_email,
                    name=name,
                    lastMessage=message.content,
                    lastMessageTime=message.created_at,
                    unreadCount=unread_count,
                    unread=unread_count > 0,
                )
            )
        return summaries
