"""Message repository - Database operations for chat messages"""

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Message, User


class MessageRepository:
    """Repository for chat message database operations"""

    @staticmethod
    def create_message(db: Session, user_email: str, sender: str, content: str) -> Message:
        """Persist a message; new messages always start unread"""
        message = Message(user_email=user_email, sender=sender, content=content, is_read=False)
        db.add(message)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        db.refresh(message)
        return message

    @staticmethod
    def get_thread(db: Session, user_email: str) -> list[Message]:
        """Full history of one conversation, oldest first"""
        return (
            db.query(Message)
            .filter(Message.user_email == user_email)
            .order_by(Message.created_at.asc(), Message.id.asc())
            .all()
        )

    @staticmethod
    def mark_thread_read(db: Session, user_email: str, sender: str) -> int:
        """
        Flag every unread message from `sender` in the thread as read.
        Returns the number of rows that actually changed.
        """
        try:
            updated = (
                db.query(Message)
                .filter(
                    Message.user_email == user_email,
                    Message.sender == sender,
                    Message.is_read.is_(False),
                )
                .update({Message.is_read: True}, synchronize_session=False)
            )
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        return updated

    @staticmethod
    def get_thread_summaries(db: Session) -> list[tuple[Message, str, int]]:
        """
        Latest message of every thread with the client's name and the number
        of client messages the admins have not read yet, newest thread first.
        """
        unread_from_user = case(
            ((Message.sender == "user") & Message.is_read.is_(False), 1), else_=0
        )
        threads = (
            db.query(
                Message.user_email.label("user_email"),
                func.max(Message.id).label("last_id"),
                func.sum(unread_from_user).label("unread_count"),
            )
            .group_by(Message.user_email)
            .subquery()
        )
        return (
            db.query(Message, User.name, threads.c.unread_count)
            .join(threads, Message.id == threads.c.last_id)
            .outerjoin(User, User.email == Message.user_email)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .all()
        )
