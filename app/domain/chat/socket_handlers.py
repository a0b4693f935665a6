"""
Socket.IO event handlers for the chat

Events handled:
- join_room / leave_room: bind the connection to a user room or the admin room
- send_message: persist, then broadcast new_message to the thread room
- mark_read: bulk-mark the counterpart's messages and emit a read receipt

Handlers never broadcast a message that failed to persist; failures are
reported to the originating connection with an `error` event.
"""

import logging
from typing import Callable, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .rooms import RoomRouter, UserRoom, parse_room_key
from .schemas import ErrorEvent, MarkReadRequest, MessageCreate, SendAck
from .service import ChatService, build_new_message_event, build_read_receipt

logger = logging.getLogger(__name__)


class ChatSocketHandler:
    """Chat event handlers bound to an injected room router and session factory"""

    def __init__(self, rooms: RoomRouter, session_factory: Callable[[], Session]):
        self.rooms = rooms
        self.session_factory = session_factory

    def register(self, sio) -> None:
        sio.on("connect", handler=self.on_connect)
        sio.on("disconnect", handler=self.on_disconnect)
        sio.on("join_room", handler=self.on_join_room)
        sio.on("leave_room", handler=self.on_leave_room)
        sio.on("send_message", handler=self.on_send_message)
        sio.on("mark_read", handler=self.on_mark_read)

    async def on_connect(self, sid, environ, auth=None):
        logger.info(f"⚡ New connection: {sid}")

    async def on_disconnect(self, sid, reason=None):
        logger.info(f"Connection closed: {sid}")

    async def on_join_room(self, sid, room_key):
        room = parse_room_key(room_key)
        if room is None:
            logger.debug(f"Ignoring join_room without a room key from {sid}")
            return None
        await self.rooms.join(sid, room)
        return {"room": room.key}

    async def on_leave_room(self, sid, room_key):
        room = parse_room_key(room_key)
        if room is None:
            return None
        await self.rooms.leave(sid, room)
        return {"room": room.key}

    async def on_send_message(self, sid, data=None) -> Optional[dict]:
        try:
            payload = MessageCreate.model_validate(data or {})
        except ValidationError as e:
            logger.warning(f"Invalid send_message payload from {sid}: {e.errors()}")
            await self._emit_error(sid, "Invalid message payload", e)
            return None

        db = self.session_factory()
        try:
            message = ChatService(db).send_message(payload)
        except SQLAlchemyError as e:
            logger.error(f"❌ send_message failed to persist for {payload.email}: {e}")
            await self._emit_error(sid, "Failed to store message", e)
            return None
        finally:
            db.close()

        event = build_new_message_event(message, client_id=payload.clientId)
        # The sender already rendered the message optimistically; it gets the ack instead
        await self.rooms.emit_to_room(
            UserRoom(email=message.user_email),
            "new_message",
            event.model_dump(mode="json"),
            skip_sid=sid,
        )
        return SendAck(
            id=message.id, client_id=payload.clientId, created_at=event.created_at
        ).model_dump(mode="json")

    async def on_mark_read(self, sid, data=None) -> Optional[dict]:
        try:
            payload = MarkReadRequest.model_validate(data or {})
        except ValidationError as e:
            logger.warning(f"Invalid mark_read payload from {sid}: {e.errors()}")
            await self._emit_error(sid, "Invalid mark_read payload", e)
            return None

        db = self.session_factory()
        try:
            updated = ChatService(db).mark_read(payload.userEmail, payload.actor)
        except SQLAlchemyError as e:
            logger.error(f"❌ mark_read failed for {payload.userEmail}: {e}")
            await self._emit_error(sid, "Failed to mark messages as read", e)
            return None
        finally:
            db.close()

        # Receipts go out even when nothing changed; clients tolerate duplicates
        room, receipt = build_read_receipt(payload.userEmail, payload.actor)
        await self.rooms.emit_to_room(room, "message_read_receipt", receipt.model_dump(mode="json"))
        return {"updated": updated}

    async def _emit_error(self, sid: str, message: str, exc: Exception) -> None:
        event = ErrorEvent(message=message, error=type(exc).__name__)
        await self.rooms.emit_to_connection(sid, "error", event.model_dump())
