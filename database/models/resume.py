from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Boolean, JSON, Index, func

from .base import Base


class Resume(Base):
    """
    Uploaded resume. Skill extraction happens upstream; only the extracted
    skills are consumed here (they supplement profile skills when matching).
    """
    __tablename__ = 'resumes'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    title = Column(Text, nullable=False, default='')
    file_url = Column(Text)
    extracted_skills = Column(JSON, nullable=False, default=list)

    is_default = Column(Boolean, nullable=False, default=False)
    status = Column(Text, nullable=False, default='active')  # active|archived

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_resumes_user_default', 'user_id', 'is_default'),
    )
