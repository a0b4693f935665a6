"""
Chat rooms and event routing

Rooms are Socket.IO broadcast groups. Every client thread has its own room
keyed by the client's email; all admin connections share one admin room.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

ADMIN_ROOM_KEY = "admin_room"


@dataclass(frozen=True)
class UserRoom:
    """Room for one client's conversation"""

    email: str

    @property
    def key(self) -> str:
        return self.email


@dataclass(frozen=True)
class AdminRoom:
    """Room shared by every admin connection"""

    @property
    def key(self) -> str:
        return ADMIN_ROOM_KEY


ADMIN_ROOM = AdminRoom()

Room = Union[UserRoom, AdminRoom]


def parse_room_key(raw: Any) -> Optional[Room]:
    """Turn a wire room key into a Room; blank or non-string keys give None"""
    if not isinstance(raw, str):
        return None
    key = raw.strip()
    if not key:
        return None
    if key == ADMIN_ROOM_KEY:
        return ADMIN_ROOM
    return UserRoom(email=key)


class RoomRouter:
    """
    Binds connections to rooms and delivers events to them.

    Wraps a Socket.IO server (or anything with the same enter_room /
    leave_room / emit coroutines) so the chat handlers never touch a
    module-level socket.
    """

    def __init__(self, server):
        self.server = server

    async def join(self, sid: str, room: Room) -> None:
        await self.server.enter_room(sid, room.key)
        logger.info(f"📩 Connection {sid} joined room: {room.key}")

    async def leave(self, sid: str, room: Room) -> None:
        await self.server.leave_room(sid, room.key)
        logger.info(f"Connection {sid} left room: {room.key}")

    async def emit_to_room(
        self, room: Room, event: str, payload: dict, skip_sid: Optional[str] = None
    ) -> None:
        """Best-effort delivery to everyone currently in the room"""
        await self.server.emit(event, payload, room=room.key, skip_sid=skip_sid)

    async def emit_to_connection(self, sid: str, event: str, payload: dict) -> None:
        await self.server.emit(event, payload, to=sid)
