#!/usr/bin/env python3
"""
Wire contract of the messaging hub.

Frames are JSON objects {"event": <name>, "data": {...}}. This module names
the events, validates inbound payloads and shapes outbound ones.

send_message payloads are a tagged union on message_type: image and file
messages must carry a file reference, text and system messages carry none.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from chat.exceptions import ChatValidationError

# Client -> server
GET_CHAT_ROOMS = "get_chat_rooms"
CREATE_CHAT_ROOM = "create_chat_room"
JOIN_CHAT_ROOM = "join_chat_room"
SEND_MESSAGE = "send_message"
MARK_MESSAGES_READ = "mark_messages_read"

# Server -> client
CHAT_ROOMS = "chat_rooms"
CHAT_ROOM_CREATED = "chat_room_created"
CHAT_HISTORY = "chat_history"
NEW_MESSAGE = "new_message"
MESSAGE_NOTIFICATION = "message_notification"
MESSAGES_READ = "messages_read"
MARK_READ_SUCCESS = "mark_read_success"
USER_STATUS = "user_status"
ERROR = "error"


# ----------------------------
# Inbound payloads
# ----------------------------
class CreateRoomPayload(BaseModel):
    recipient_id: int
    job_id: Optional[int] = None


class RoomPayload(BaseModel):
    room_id: int


class _SendMessageBase(BaseModel):
    model_config = ConfigDict(extra='ignore')

    room_id: int
    content: str = Field(min_length=1)


class SendTextMessage(_SendMessageBase):
    message_type: Literal['text'] = 'text'


class SendSystemMessage(_SendMessageBase):
    message_type: Literal['system']


class SendImageMessage(_SendMessageBase):
    message_type: Literal['image']
    file_url: str = Field(min_length=1)
    file_name: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)


class SendFileMessage(_SendMessageBase):
    message_type: Literal['file']
    file_url: str = Field(min_length=1)
    file_name: Optional[str] = None
    file_size: Optional[int] = Field(None, ge=0)


SendMessagePayload = Annotated[
    Union[SendTextMessage, SendSystemMessage, SendImageMessage, SendFileMessage],
    Field(discriminator='message_type')
]

_send_message_adapter = TypeAdapter(SendMessagePayload)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get('loc', ()) if part)
    return f"{location}: {first.get('msg')}" if location else str(first.get('msg'))


def parse_payload(model, data: Any):
    """Validate an inbound payload, raising ChatValidationError on failure."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ChatValidationError("Event payload must be an object")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ChatValidationError(f"Invalid payload ({_describe(e)})")


def parse_send_message(data: Any):
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ChatValidationError("Event payload must be an object")
    data = dict(data)
    if data.get('message_type') is None:
        data['message_type'] = 'text'
    try:
        return _send_message_adapter.validate_python(data)
    except ValidationError as e:
        raise ChatValidationError(f"Invalid payload ({_describe(e)})")


# ----------------------------
# Outbound views
# ----------------------------
class UserSummary(BaseModel):
    """Who is on the other end, as shown next to rooms and messages."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: str
    display_name: str


class MessageView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    room_id: int
    sender_id: int
    message_type: str
    content: str
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    is_read: bool = False
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    sender: Optional[UserSummary] = None


class RoomView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employer_id: int
    seeker_id: int
    job_id: Optional[int] = None
    status: str
    last_message_id: Optional[int] = None
    last_message: Optional[str] = None
    last_message_time: Optional[datetime] = None
    employer_unread_count: int = 0
    seeker_unread_count: int = 0
    created_at: Optional[datetime] = None

    # Viewer-relative annotations
    counterpart: Optional[UserSummary] = None
    unread_count: int = 0
    is_online: bool = False

    def counterpart_of(self, user_id: int) -> int:
        return self.seeker_id if user_id == self.employer_id else self.employer_id


def room_view(room, viewer_id: int) -> RoomView:
    view = RoomView.model_validate(room)
    counterpart = room.counterpart_user(viewer_id)
    return view.model_copy(update={
        'counterpart': UserSummary.model_validate(counterpart) if counterpart is not None else None,
        'unread_count': room.unread_count_for(viewer_id),
    })


def dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode='json')


def dump_all(models: List[BaseModel]) -> List[Dict[str, Any]]:
    return [dump(m) for m in models]
