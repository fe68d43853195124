"""Authentication schemas shared by the service and the API layer."""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class AuthResult(BaseModel, Generic[T]):
    """
    Uniform result of every auth operation.

    ``error`` is the failure tag (``duplicate_email``, ``invalid_token`` ...)
    and is only set when ``success`` is false.
    """

    success: bool
    message: str
    error: Optional[str] = None
    data: Optional[T] = None


class UserPublic(BaseModel):
    """Schema for user profile response (without password hash)."""

    id: str
    name: str
    email: str
    role: str
    profile_pic: Optional[str] = ""
    resume_url: Optional[str] = ""
    bio: Optional[str] = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
