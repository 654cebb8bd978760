from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Boolean, Index, func
from sqlalchemy.orm import relationship

from .base import Base

MESSAGE_TYPES = ('text', 'image', 'file', 'system')


class ChatRoom(Base):
    """
    Conversation between one employer and one seeker, optionally about a job.

    Unread counters are denormalized per side and only ever changed with
    SQL-side expressions (increment / reset) in the same transaction as the
    message write. last_message_id is a plain lookup id, not a relationship.
    """
    __tablename__ = 'chat_rooms'

    id = Column(Integer, primary_key=True, autoincrement=True)
    employer_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    seeker_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    job_id = Column(Integer, ForeignKey('jobs.id', ondelete='SET NULL'), nullable=True)

    status = Column(Text, nullable=False, default='active')  # active|archived

    # Last message preview
    last_message_id = Column(Integer)
    last_message = Column(Text)
    last_message_time = Column(TIMESTAMP(timezone=True))

    # Unread counters (never negative)
    employer_unread_count = Column(Integer, nullable=False, default=0)
    seeker_unread_count = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    employer = relationship("User", foreign_keys=[employer_id])
    seeker = relationship("User", foreign_keys=[seeker_id])
    messages = relationship("ChatMessage", back_populates="room", order_by="ChatMessage.id")

    __table_args__ = (
        Index('idx_chat_rooms_triple', 'employer_id', 'seeker_id', 'job_id'),
        Index('idx_chat_rooms_seeker', 'seeker_id'),
    )

    def is_participant(self, user_id: int) -> bool:
        return user_id in (self.employer_id, self.seeker_id)

    def counterpart_of(self, user_id: int) -> int:
        return self.seeker_id if user_id == self.employer_id else self.employer_id

    def counterpart_user(self, user_id: int):
        return self.seeker if user_id == self.employer_id else self.employer

    def unread_count_for(self, user_id: int) -> int:
        if user_id == self.employer_id:
            return self.employer_unread_count or 0
        return self.seeker_unread_count or 0


class ChatMessage(Base):
    """
    Message in a room. Immutable apart from the one-time unread -> read
    transition. Insertion order (id) is the authoritative ordering.
    """
    __tablename__ = 'chat_messages'

    id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(Integer, ForeignKey('chat_rooms.id', ondelete='CASCADE'), nullable=False)
    sender_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    message_type = Column(Text, nullable=False, default='text')  # text|image|file|system
    content = Column(Text, nullable=False)

    # File reference (image/file messages only)
    file_url = Column(Text)
    file_name = Column(Text)
    file_size = Column(Integer)

    is_read = Column(Boolean, nullable=False, default=False)
    read_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    room = relationship("ChatRoom", back_populates="messages")
    sender = relationship("User")

    __table_args__ = (
        Index('idx_chat_messages_room', 'room_id', 'id'),
        Index('idx_chat_messages_unread', 'room_id', 'is_read'),
    )


# At most one active room per (employer, seeker, job); general rooms have no job
Index(
    'uq_chat_rooms_active_triple',
    ChatRoom.employer_id,
    ChatRoom.seeker_id,
    func.coalesce(ChatRoom.job_id, 0),
    unique=True,
    postgresql_where=ChatRoom.status == 'active',
    sqlite_where=ChatRoom.status == 'active',
)
