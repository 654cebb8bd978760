import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Set

from sqlalchemy import select, update, or_
from sqlalchemy.orm import selectinload

from database.models import ChatRoom, ChatMessage
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _unread_column(room: ChatRoom, user_id: Any):
    """Counter column belonging to user_id's side of the room."""
    if user_id == room.employer_id:
        return ChatRoom.employer_unread_count
    return ChatRoom.seeker_unread_count


class ChatRepository(BaseRepository):
    def get_room(self, room_id: Any) -> Optional[ChatRoom]:
        return self.db.get(ChatRoom, room_id)

    def find_active_room(
        self,
        employer_id: Any,
        seeker_id: Any,
        job_id: Optional[Any] = None
    ) -> Optional[ChatRoom]:
        stmt = select(ChatRoom).where(
            ChatRoom.employer_id == employer_id,
            ChatRoom.seeker_id == seeker_id,
            ChatRoom.status == 'active'
        )
        if job_id is None:
            stmt = stmt.where(ChatRoom.job_id.is_(None))
        else:
            stmt = stmt.where(ChatRoom.job_id == job_id)

        return self.db.execute(stmt.order_by(ChatRoom.id).limit(1)).scalar_one_or_none()

    def create_room(self, employer_id: Any, seeker_id: Any, job_id: Optional[Any] = None) -> ChatRoom:
        room = ChatRoom(
            employer_id=employer_id,
            seeker_id=seeker_id,
            job_id=job_id,
            status='active',
            employer_unread_count=0,
            seeker_unread_count=0
        )
        self.db.add(room)
        self.db.flush()
        logger.info(f"Created chat room {room.id} (employer={employer_id}, seeker={seeker_id}, job={job_id})")
        return room

    def list_rooms_for_user(self, user_id: Any) -> List[ChatRoom]:
        stmt = (
            select(ChatRoom)
            .options(selectinload(ChatRoom.employer), selectinload(ChatRoom.seeker))
            .where(or_(ChatRoom.employer_id == user_id, ChatRoom.seeker_id == user_id))
            .order_by(
                ChatRoom.last_message_time.is_(None),
                ChatRoom.last_message_time.desc(),
                ChatRoom.id.desc()
            )
        )
        return list(self.db.execute(stmt).scalars().all())

    def counterpart_ids(self, user_id: Any) -> Set[int]:
        """Everyone user_id shares a room with, archived rooms included."""
        stmt = select(ChatRoom.employer_id, ChatRoom.seeker_id).where(
            or_(ChatRoom.employer_id == user_id, ChatRoom.seeker_id == user_id)
        )
        return {
            seeker_id if employer_id == user_id else employer_id
            for employer_id, seeker_id in self.db.execute(stmt).all()
        }

    def get_history(self, room_id: Any) -> List[ChatMessage]:
        """All messages of a room in insertion order."""
        stmt = (
            select(ChatMessage)
            .options(selectinload(ChatMessage.sender))
            .where(ChatMessage.room_id == room_id)
            .order_by(ChatMessage.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def add_message(
        self,
        room: ChatRoom,
        sender_id: Any,
        message_type: str,
        content: str,
        preview_length: int,
        file_url: Optional[str] = None,
        file_name: Optional[str] = None,
        file_size: Optional[int] = None
    ) -> ChatMessage:
        """
        Persist a message, refresh the room preview and bump the recipient's
        unread counter. Must run inside a single transaction.
        """
        now = datetime.now(timezone.utc)
        message = ChatMessage(
            room_id=room.id,
            sender_id=sender_id,
            message_type=message_type,
            content=content,
            file_url=file_url,
            file_name=file_name,
            file_size=file_size,
            is_read=False,
            created_at=now
        )
        self.db.add(message)
        self.db.flush()  # Generate ID

        recipient_id = room.counterpart_of(sender_id)
        counter = _unread_column(room, recipient_id)

        self.db.execute(
            update(ChatRoom)
            .where(ChatRoom.id == room.id)
            .values({
                ChatRoom.last_message_id: message.id,
                ChatRoom.last_message: content[:preview_length],
                ChatRoom.last_message_time: now,
                counter: counter + 1,
            })
        )
        return message

    def reset_unread(self, room: ChatRoom, user_id: Any) -> None:
        counter = _unread_column(room, user_id)
        self.db.execute(
            update(ChatRoom)
            .where(ChatRoom.id == room.id)
            .values({counter: 0})
        )

    def mark_read_from_counterpart(self, room: ChatRoom, reader_id: Any) -> List[int]:
        """
        Mark every unread message the other participant sent as read and reset
        the reader's counter. Returns the ids that changed.
        """
        stmt = select(ChatMessage.id).where(
            ChatMessage.room_id == room.id,
            ChatMessage.sender_id != reader_id,
            ChatMessage.is_read.is_(False)
        ).order_by(ChatMessage.id)
        message_ids = list(self.db.execute(stmt).scalars().all())

        if message_ids:
            self.db.execute(
                update(ChatMessage)
                .where(ChatMessage.id.in_(message_ids), ChatMessage.is_read.is_(False))
                .values(is_read=True, read_at=datetime.now(timezone.utc))
            )

        self.reset_unread(room, reader_id)
        return message_ids

    def archive_room(self, room: ChatRoom) -> ChatRoom:
        room.status = 'archived'
        self.db.flush()
        return room
