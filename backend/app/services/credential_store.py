"""
Credential Store.

Row-oriented persistence of user profiles. The auth service only sees the
``CredentialStore`` protocol; ``SqlCredentialStore`` is the SQLAlchemy
implementation used by the application.
"""

from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreError
from app.core.logger import get_logger
from app.models import UserProfile

logger = get_logger("credential_store")


def normalize_email(email: str) -> str:
    """Canonical form used for every email written or looked up."""
    return (email or "").strip().lower()


class CredentialStore(Protocol):
    async def find_by_email(self, email: str) -> list[UserProfile]: ...

    async def get_by_id(self, user_id: str) -> Optional[UserProfile]: ...

    async def insert(self, record: dict) -> UserProfile: ...


class SqlCredentialStore:
    """Credential store backed by the ``user_profiles`` table."""

    def __init__(self, db: Session):
        self.db = db

    async def find_by_email(self, email: str) -> list[UserProfile]:
        try:
            return (
                self.db.query(UserProfile)
                .filter(UserProfile.email == normalize_email(email))
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Profile lookup failed: {e}")
            raise StoreError() from e

    async def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        try:
            return self.db.query(UserProfile).filter(UserProfile.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Profile lookup failed: {e}")
            raise StoreError() from e

    async def insert(self, record: dict) -> UserProfile:
        """
        Insert a new profile and return it with its generated id.

        A unique-index violation on ``email`` (two registrations racing past
        the existence check) surfaces here as ``StoreError``.
        """
        profile = UserProfile(**{**record, "email": normalize_email(record["email"])})
        try:
            self.db.add(profile)
            self.db.commit()
            self.db.refresh(profile)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Profile insert failed: {e}")
            raise StoreError() from e
        return profile
