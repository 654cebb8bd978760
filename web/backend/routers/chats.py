#!/usr/bin/env python3
"""
Chat endpoints - room housekeeping that does not need a live connection.
"""

import logging
from fastapi import APIRouter, Depends, Request

from chat import AuthenticatedUser, ChatHub
from chat.exceptions import ChatError, ChatAuthorizationError, ChatNotFoundError
from database.models import User
from ..dependencies import get_current_user
from ..exceptions import (
    ServiceException,
    AuthorizationException,
    NotFoundException,
    ValidationException
)
from ..models.responses import ChatRoomResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chats", tags=["chats"])


def get_chat_hub(request: Request) -> ChatHub:
    return request.app.state.chat_hub


def to_service_exception(exc: ChatError) -> ServiceException:
    """Translate a hub error into the HTTP error hierarchy."""
    if isinstance(exc, ChatNotFoundError):
        return NotFoundException(exc.message)
    if isinstance(exc, ChatAuthorizationError):
        return AuthorizationException(exc.message)
    return ValidationException(exc.message)


@router.post("/{room_id}/archive", response_model=ChatRoomResponse)
async def archive_chat_room(
    room_id: int,
    user: User = Depends(get_current_user),
    hub: ChatHub = Depends(get_chat_hub)
):
    """
    Archive a chat room.

    Archived rooms stay listed and readable; opening a conversation for the
    same employer, seeker and job afterwards starts a fresh room.
    """
    caller = AuthenticatedUser(id=user.id, username=user.username, role=user.role)
    try:
        room = await hub.archive_room(caller, room_id)
    except ChatError as e:
        raise to_service_exception(e)

    return ChatRoomResponse(success=True, room_id=room.id, status=room.status)
