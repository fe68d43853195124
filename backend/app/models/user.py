import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, String, Text

from app.db.base import Base

ROLES = ("job-seeker", "recruiter")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserProfile(Base):
    """User profile for authentication and role-based routing."""

    __tablename__ = "user_profiles"
    __table_args__ = (
        CheckConstraint("role IN ('job-seeker', 'recruiter')", name="ck_user_profiles_role"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)  # 'job-seeker' | 'recruiter'

    profile_pic = Column(String, default="")
    resume_url = Column(String, default="")
    bio = Column(Text, default="")

    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
