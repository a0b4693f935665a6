"""Chat domain - Real-time messaging between clients and the salon"""

from .rooms import ADMIN_ROOM, AdminRoom, RoomRouter, UserRoom
from .router import router
from .socket_handlers import ChatSocketHandler

__all__ = ["router", "ChatSocketHandler", "RoomRouter", "UserRoom", "AdminRoom", "ADMIN_ROOM"]
