"""
Socket.IO server construction

The server is built once in main.py and handed to the chat handlers and the
room router; nothing else reaches it through a global.
"""

import logging

import socketio

from .config import ALLOWED_ORIGINS

logger = logging.getLogger(__name__)


def create_socket_server() -> socketio.AsyncServer:
    cors_origins = "*" if ALLOWED_ORIGINS == ["*"] else ALLOWED_ORIGINS
    server = socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=cors_origins,
        # One connection's events run in arrival order
        async_handlers=False,
        logger=False,
        engineio_logger=False,
    )
    logger.info(f"Socket.IO server created (CORS origins: {cors_origins})")
    return server
