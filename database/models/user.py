from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, JSON, func
from sqlalchemy.orm import relationship

from .base import Base
from .preferences import JobPreferences

USER_ROLES = ('seeker', 'employer', 'admin')
USER_STATUSES = ('active', 'inactive', 'suspended')


class User(Base):
    """
    Marketplace account. Credentials live with the account service; this
    table only carries what authorization needs (role, status).
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(Text, nullable=False, unique=True)
    email = Column(Text, nullable=False, unique=True)
    role = Column(Text, nullable=False)  # seeker|employer|admin
    status = Column(Text, nullable=False, default='active')  # active|inactive|suspended

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    seeker_profile = relationship("SeekerProfile", back_populates="user", uselist=False)
    employer_profile = relationship("EmployerProfile", back_populates="user", uselist=False)

    @property
    def is_active(self) -> bool:
        return self.status == 'active'

    @property
    def display_name(self) -> str:
        """Company name for employers, full name for seekers, else the username."""
        if self.role == 'employer' and self.employer_profile is not None:
            return self.employer_profile.company_name
        if self.role == 'seeker' and self.seeker_profile is not None:
            return self.seeker_profile.full_name
        return self.username


class SeekerProfile(Base):
    """
    Job seeker profile used as the seeker side of match scoring.
    """
    __tablename__ = 'seeker_profiles'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    full_name = Column(Text, nullable=False)
    current_location = Column(Text)
    education_level = Column(Text)  # high_school|associate|bachelor|master|phd|other
    work_experience_years = Column(Integer)
    skills = Column(JSON, nullable=False, default=list)

    expected_salary_min = Column(Integer)
    expected_salary_max = Column(Integer)

    # Stored as JSON; read through the preferences property
    job_preferences = Column(JSON, nullable=False, default=dict)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="seeker_profile")

    @property
    def preferences(self) -> JobPreferences:
        return JobPreferences.model_validate(self.job_preferences or {})


class EmployerProfile(Base):
    """
    Company details shown to seekers in chat and job listings.
    """
    __tablename__ = 'employer_profiles'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    company_name = Column(Text, nullable=False)
    company_logo = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="employer_profile")
