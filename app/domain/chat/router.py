"""Chat router - REST endpoints for message history and the socket fallback"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...database import get_db
from .rooms import RoomRouter, UserRoom
from .schemas import ChatMessageResponse, ChatSummary, MessageCreate
from .service import ChatService, build_new_message_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["Chat"])


def get_chat_service(db: Session = Depends(get_db)) -> ChatService:
    """Dependency injection for ChatService"""
    return ChatService(db)


def get_room_router(request: Request) -> RoomRouter:
    """Room router attached to the application at startup"""
    return request.app.state.room_router


# Declared before /{email} so "admin" is not read as an email
@router.get("/admin/list", response_model=list[ChatSummary])
async def get_admin_chat_list(service: ChatService = Depends(get_chat_service)):
    """Conversation list for the admin inbox, most recent first"""
    return service.list_threads()


@router.get("/{email}", response_model=list[ChatMessageResponse])
async def get_thread(email: str, service: ChatService = Depends(get_chat_service)):
    """Full message history of a client's conversation"""
    return service.get_thread(email)


@router.post("", response_model=ChatMessageResponse, status_code=201)
async def send_message(
    data: MessageCreate,
    service: ChatService = Depends(get_chat_service),
    rooms: RoomRouter = Depends(get_room_router),
):
    """Store a message when the socket is unavailable and notify the thread room"""
    message = service.send_message(data)
    event = build_new_message_event(message, client_id=data.clientId)
    await rooms.emit_to_room(
        UserRoom(email=message.user_email), "new_message", event.model_dump(mode="json")
    )
    return message
