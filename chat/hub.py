#!/usr/bin/env python3
"""
Chat Hub - realtime rooms, messages and unread bookkeeping.

Lifecycle of a connection:
    authenticate(token) -> connect(conn) -> dispatch(conn, event, data)* -> disconnect(conn)

Each persistence step runs as one unit of work in the thread pool, so a slow
query on one connection never stalls the event loop. Pushes to other
connections happen only after the unit of work has committed; a push that
fails is logged and does not undo the operation.

Usage:
    hub = ChatHub(session_factory)
    user = await hub.authenticate(token)
    conn = SomeConnection(user)
    await hub.connect(conn)
    await hub.dispatch(conn, "send_message", {"room_id": 1, "content": "hi"})
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError

from core.config_loader import AuthConfig, ChatConfig
from core.security import AuthenticationError, decode_access_token
from database.database import SessionFactory
from database.models import ChatRoom
from database.repository import MarketplaceRepository
from database.uow import marketplace_uow
from chat import events
from chat.connection import AuthenticatedUser, Connection
from chat.exceptions import (
    ChatError,
    ChatAuthorizationError,
    ChatNotFoundError,
    ChatValidationError,
)
from chat.events import MessageView, RoomView, dump, dump_all, room_view
from chat.sessions import SessionRegistry

logger = logging.getLogger(__name__)

ROOM_ROLES = ('employer', 'seeker')

Handler = Callable[[Connection, Any], Awaitable[None]]


def _load_participant_room(repo: MarketplaceRepository, room_id: int, user_id: int) -> ChatRoom:
    room = repo.chat.get_room(room_id)
    if room is None:
        raise ChatNotFoundError("Chat room not found")
    if not room.is_participant(user_id):
        raise ChatAuthorizationError("You do not have access to this chat room")
    return room


class ChatHub:
    """Messaging hub shared by all live connections of one process."""

    def __init__(
        self,
        session_factory: SessionFactory,
        registry: Optional[SessionRegistry] = None,
        config: Optional[ChatConfig] = None,
        auth_config: Optional[AuthConfig] = None
    ):
        self.session_factory = session_factory
        self.registry = registry or SessionRegistry()
        self.config = config or ChatConfig()
        self.auth_config = auth_config or AuthConfig()

        self._handlers: Dict[str, Handler] = {
            events.GET_CHAT_ROOMS: self._on_get_chat_rooms,
            events.CREATE_CHAT_ROOM: self._on_create_chat_room,
            events.JOIN_CHAT_ROOM: self._on_join_chat_room,
            events.SEND_MESSAGE: self._on_send_message,
            events.MARK_MESSAGES_READ: self._on_mark_messages_read,
        }

    # ----------------------------
    # Connection lifecycle
    # ----------------------------
    async def authenticate(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Resolve a bearer token to an active user.

        Raises:
            AuthenticationError: On any failure; no session is created.
        """
        user_id = decode_access_token(token, self.auth_config)
        user = await run_in_threadpool(self._load_user, user_id)
        if user is None:
            raise AuthenticationError("Invalid user")
        return user

    def _load_user(self, user_id: int) -> Optional[AuthenticatedUser]:
        with marketplace_uow(self.session_factory) as repo:
            user = repo.users.get_by_id(user_id)
            if user is None:
                return None
            if not user.is_active:
                raise AuthenticationError("Account is not active")
            return AuthenticatedUser(id=user.id, username=user.username, role=user.role)

    async def connect(self, connection: Connection) -> None:
        """
        Register a live connection. A newer connection of the same user
        supersedes the old one, which is dropped from its rooms and closed.
        """
        user = connection.user
        previous = self.registry.register(connection)
        logger.info(f"User {user.id} ({user.username}) connected")

        if previous is None:
            await self._broadcast_status(user, 'online')
            return

        self.registry.unregister(previous)
        try:
            await previous.close("Replaced by a newer connection")
        except Exception as e:
            logger.warning(f"Failed to close superseded {previous!r}: {e}")

    async def disconnect(self, connection: Connection) -> None:
        if self.registry.unregister(connection):
            logger.info(f"User {connection.user.id} disconnected")
            await self._broadcast_status(connection.user, 'offline')

    async def dispatch(self, connection: Connection, event: Any, data: Any = None) -> None:
        """
        Handle one client event to completion.

        Failures are reported to this connection only, as an "error" event.
        """
        handler = self._handlers.get(event) if isinstance(event, str) else None
        try:
            if handler is None:
                raise ChatValidationError(f"Unknown event: {event!r}")
            logger.debug(f"User {connection.user.id} -> {event}")
            await handler(connection, data)
        except ChatError as e:
            logger.info(f"Rejected {event!r} from user {connection.user.id}: [{e.code}] {e.message}")
            await self._push(connection, events.ERROR, {
                'code': e.code,
                'message': e.message,
                'event': event if isinstance(event, str) else None,
            })
        except Exception:
            logger.exception(f"Unexpected error handling {event!r} for user {connection.user.id}")
            await self._push(connection, events.ERROR, {
                'code': 'internal',
                'message': 'Internal server error',
                'event': event if isinstance(event, str) else None,
            })

    # ----------------------------
    # Operations
    # ----------------------------
    async def list_rooms(self, user: AuthenticatedUser) -> List[RoomView]:
        """Rooms the user takes part in, annotated with the counterpart's presence."""
        rooms = await run_in_threadpool(self._list_rooms_tx, user)
        return [
            room.model_copy(update={'is_online': self.registry.is_online(room.counterpart_of(user.id))})
            for room in rooms
        ]

    def _list_rooms_tx(self, user: AuthenticatedUser) -> List[RoomView]:
        with marketplace_uow(self.session_factory) as repo:
            return [room_view(room, user.id) for room in repo.chat.list_rooms_for_user(user.id)]

    async def create_or_get_room(
        self,
        connection: Connection,
        recipient_id: Optional[int],
        job_id: Optional[int] = None
    ) -> RoomView:
        """
        Find the active room for (employer, seeker, job) or open one, and
        subscribe the caller's connection to it.
        """
        if recipient_id is None:
            raise ChatValidationError("recipient_id is required")

        user = connection.user
        if user.role not in ROOM_ROLES:
            raise ChatAuthorizationError("Only employers and seekers can open chat rooms")

        room = await run_in_threadpool(self._create_or_get_room_tx, user, recipient_id, job_id)
        self.registry.join_group(room.id, connection)

        return room.model_copy(update={'is_online': self.registry.is_online(room.counterpart_of(user.id))})

    def _create_or_get_room_tx(
        self,
        user: AuthenticatedUser,
        recipient_id: int,
        job_id: Optional[int]
    ) -> RoomView:
        if user.role == 'employer':
            employer_id, seeker_id, counterpart_role = user.id, recipient_id, 'seeker'
        else:
            employer_id, seeker_id, counterpart_role = recipient_id, user.id, 'employer'

        with marketplace_uow(self.session_factory) as repo:
            recipient = repo.users.get_by_id(recipient_id)
            if recipient is None:
                raise ChatNotFoundError("Recipient not found")
            if recipient.role != counterpart_role:
                raise ChatValidationError(f"Recipient must be a {counterpart_role}")

            if job_id is not None:
                job = repo.jobs.get_by_id(job_id)
                if job is None:
                    raise ChatNotFoundError("Job not found")
                if job.employer_id != employer_id:
                    raise ChatValidationError("Job does not belong to this employer")

        try:
            with marketplace_uow(self.session_factory) as repo:
                room = repo.chat.find_active_room(employer_id, seeker_id, job_id)
                if room is None:
                    room = repo.chat.create_room(employer_id, seeker_id, job_id)
                return room_view(room, user.id)
        except IntegrityError:
            # Another connection opened the same room first
            with marketplace_uow(self.session_factory) as repo:
                room = repo.chat.find_active_room(employer_id, seeker_id, job_id)
                if room is None:
                    raise
                logger.info(f"Reusing chat room {room.id} created concurrently")
                return room_view(room, user.id)

    async def join_room(self, connection: Connection, room_id: int) -> List[MessageView]:
        """
        Subscribe to a room, clear the caller's unread counter and return the
        full history, oldest first.

        The connection is in the room group before the history is read, so a
        message committed meanwhile shows up in the history, as new_message,
        or both (clients dedupe by id).
        """
        already_joined = self.registry.in_group(room_id, connection)
        self.registry.join_group(room_id, connection)
        try:
            return await run_in_threadpool(self._join_room_tx, connection.user, room_id)
        except Exception:
            if not already_joined:
                self.registry.leave_group(room_id, connection)
            raise

    def _join_room_tx(self, user: AuthenticatedUser, room_id: int) -> List[MessageView]:
        with marketplace_uow(self.session_factory) as repo:
            room = _load_participant_room(repo, room_id, user.id)
            repo.chat.reset_unread(room, user.id)
            return [MessageView.model_validate(m) for m in repo.chat.get_history(room.id)]

    async def send_message(self, connection: Connection, payload) -> MessageView:
        """
        Persist a message and deliver it.

        The room group receives new_message; the counterpart additionally gets
        message_notification on their personal connection when online.
        """
        content = payload.content
        if not content.strip():
            raise ChatValidationError("content is required")
        if len(content) > self.config.max_message_length:
            raise ChatValidationError(
                f"content exceeds {self.config.max_message_length} characters"
            )

        user = connection.user
        message, recipient_id = await run_in_threadpool(self._send_message_tx, user, payload)

        data = dump(message)
        delivered = False
        for member in self.registry.group_members(message.room_id):
            await self._push(member, events.NEW_MESSAGE, data)
            delivered = delivered or member is connection
        if not delivered:
            await self._push(connection, events.NEW_MESSAGE, data)

        recipient = self.registry.get(recipient_id)
        if recipient is not None:
            await self._push(recipient, events.MESSAGE_NOTIFICATION, {
                'room_id': message.room_id,
                'message': data,
                'sender': user.to_dict(),
            })

        return message

    def _send_message_tx(self, user: AuthenticatedUser, payload) -> Tuple[MessageView, int]:
        with marketplace_uow(self.session_factory) as repo:
            room = _load_participant_room(repo, payload.room_id, user.id)
            message = repo.chat.add_message(
                room,
                sender_id=user.id,
                message_type=payload.message_type,
                content=payload.content,
                preview_length=self.config.preview_length,
                file_url=getattr(payload, 'file_url', None),
                file_name=getattr(payload, 'file_name', None),
                file_size=getattr(payload, 'file_size', None)
            )
            return MessageView.model_validate(message), room.counterpart_of(user.id)

    async def mark_read(self, connection: Connection, room_id: int) -> List[int]:
        """
        Mark the counterpart's unread messages as read and clear the caller's
        counter. The counterpart is told which messages were read.
        """
        user = connection.user
        message_ids, counterpart_id = await run_in_threadpool(self._mark_read_tx, user, room_id)

        if message_ids:
            counterpart = self.registry.get(counterpart_id)
            if counterpart is not None:
                await self._push(counterpart, events.MESSAGES_READ, {
                    'room_id': room_id,
                    'reader_id': user.id,
                    'message_ids': message_ids,
                })

        return message_ids

    def _mark_read_tx(self, user: AuthenticatedUser, room_id: int) -> Tuple[List[int], int]:
        with marketplace_uow(self.session_factory) as repo:
            room = _load_participant_room(repo, room_id, user.id)
            message_ids = repo.chat.mark_read_from_counterpart(room, user.id)
            return message_ids, room.counterpart_of(user.id)

    async def archive_room(self, user: AuthenticatedUser, room_id: int) -> RoomView:
        """Archive a room. Rooms are never deleted."""
        return await run_in_threadpool(self._archive_room_tx, user, room_id)

    def _archive_room_tx(self, user: AuthenticatedUser, room_id: int) -> RoomView:
        with marketplace_uow(self.session_factory) as repo:
            room = _load_participant_room(repo, room_id, user.id)
            repo.chat.archive_room(room)
            logger.info(f"Chat room {room.id} archived by user {user.id}")
            return room_view(room, user.id)

    # ----------------------------
    # Event handlers
    # ----------------------------
    async def _on_get_chat_rooms(self, connection: Connection, data: Any) -> None:
        rooms = await self.list_rooms(connection.user)
        await self._push(connection, events.CHAT_ROOMS, {'rooms': dump_all(rooms)})

    async def _on_create_chat_room(self, connection: Connection, data: Any) -> None:
        if isinstance(data, dict) and data.get('recipient_id') is None:
            raise ChatValidationError("recipient_id is required")
        payload = events.parse_payload(events.CreateRoomPayload, data)
        room = await self.create_or_get_room(connection, payload.recipient_id, payload.job_id)
        await self._push(connection, events.CHAT_ROOM_CREATED, dump(room))

    async def _on_join_chat_room(self, connection: Connection, data: Any) -> None:
        payload = events.parse_payload(events.RoomPayload, data)
        messages = await self.join_room(connection, payload.room_id)
        await self._push(connection, events.CHAT_HISTORY, {
            'room_id': payload.room_id,
            'messages': dump_all(messages),
        })

    async def _on_send_message(self, connection: Connection, data: Any) -> None:
        payload = events.parse_send_message(data)
        await self.send_message(connection, payload)

    async def _on_mark_messages_read(self, connection: Connection, data: Any) -> None:
        payload = events.parse_payload(events.RoomPayload, data)
        message_ids = await self.mark_read(connection, payload.room_id)
        await self._push(connection, events.MARK_READ_SUCCESS, {
            'room_id': payload.room_id,
            'message_ids': message_ids,
        })

    # ----------------------------
    # Delivery
    # ----------------------------
    async def _push(self, connection: Connection, event: str, data: Any) -> None:
        try:
            await connection.send_event(event, data)
        except Exception as e:
            logger.warning(f"Failed to push {event} to {connection!r}: {e}")

    async def _broadcast_status(self, user: AuthenticatedUser, status: str) -> None:
        """Tell every online user who shares a room with user about its presence."""
        counterpart_ids = await run_in_threadpool(self._counterpart_ids_tx, user.id)
        for counterpart_id in sorted(counterpart_ids):
            target = self.registry.get(counterpart_id)
            if target is not None:
                await self._push(target, events.USER_STATUS, {'user_id': user.id, 'status': status})

    def _counterpart_ids_tx(self, user_id: int) -> Set[int]:
        with marketplace_uow(self.session_factory) as repo:
            return repo.chat.counterpart_ids(user_id)
