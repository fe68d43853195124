"""
Authentication API endpoints.

Handles registration, login (JWT in a cookie), logout and the current
user lookup.
"""

from functools import lru_cache
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import PasswordHasher, TokenCodec
from app.db.session import get_db
from app.models import ROLES
from app.schemas.auth import AuthResult, UserPublic
from app.services.auth_service import AuthService
from app.services.credential_store import SqlCredentialStore

router = APIRouter()

# HTTP status for each failure tag
ERROR_STATUS = {
    "store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
    "duplicate_email": status.HTTP_409_CONFLICT,
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
    "unauthorized_role": status.HTTP_403_FORBIDDEN,
    "invalid_role": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "missing_token": status.HTTP_401_UNAUTHORIZED,
    "invalid_token": status.HTTP_401_UNAUTHORIZED,
}

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"


# ============== Pydantic Schemas ==============


def _check_role(v: str) -> str:
    if v not in ROLES:
        raise ValueError("Role must be 'job-seeker' or 'recruiter'")
    return v


class UserRegister(BaseModel):
    """Schema for user registration."""

    name: str
    email: str
    password: str
    role: str = "job-seeker"

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        v = v.strip()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        return _check_role(v)


class UserLogin(BaseModel):
    """Schema for login; ``role`` is the dashboard the user is signing in to."""

    email: str
    password: str
    role: str = "job-seeker"

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        return _check_role(v)


# ============== Dependencies ==============


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


@lru_cache
def get_token_codec() -> TokenCodec:
    return TokenCodec(
        secret=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


def get_auth_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(store=SqlCredentialStore(db), hasher=hasher, codec=codec)


def get_session_token(request: Request) -> Optional[str]:
    """Extract the session token from request cookies."""
    return request.cookies.get(settings.TOKEN_COOKIE_NAME)


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    service: AuthService = Depends(get_auth_service),
) -> UserPublic:
    """
    Dependency to get the current authenticated user from the token cookie.

    Raises HTTPException if the token is missing or invalid, or the user is gone.
    """
    result = await service.get_current_user(token)
    if not result.success:
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error, status.HTTP_401_UNAUTHORIZED),
            detail=result.message,
        )
    return result.data


def _respond(result: AuthResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    code = success_status if result.success else ERROR_STATUS.get(result.error, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(status_code=code, content=result.model_dump(mode="json", exclude_none=True))


def _set_session_cookies(response: JSONResponse, token: str, role: str) -> None:
    max_age = settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    for key, value in ((settings.TOKEN_COOKIE_NAME, token), (settings.ROLE_COOKIE_NAME, role)):
        response.set_cookie(
            key=key,
            value=value,
            max_age=max_age,
            httponly=True,
            samesite="lax",
            secure=settings.COOKIE_SECURE,
        )


# ============== API Endpoints ==============


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, service: AuthService = Depends(get_auth_service)):
    """
    Register a new user.

    Returns the confirmation message only; the new profile is not echoed back.
    """
    result = await service.register(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
    )
    return _respond(result, success_status=status.HTTP_201_CREATED)


@router.post("/login")
async def login(credentials: UserLogin, service: AuthService = Depends(get_auth_service)):
    """
    Login and get a JWT session token.

    On success the token and the role are also set as cookies, which is
    what the gatekeeper reads on later navigations.
    """
    result = await service.login(
        email=credentials.email,
        password=credentials.password,
        role=credentials.role,
    )
    response = _respond(result)
    if result.success:
        _set_session_cookies(response, result.data, credentials.role)
    return response


@router.post("/logout")
async def logout():
    """Clear the session cookies. The token itself stays valid until it expires."""
    response = _respond(AuthResult(success=True, message="Logged out successfully"))
    for key in (settings.TOKEN_COOKIE_NAME, settings.ROLE_COOKIE_NAME):
        response.delete_cookie(
            key=key,
            httponly=True,
            samesite="lax",
            secure=settings.COOKIE_SECURE,
        )
    return response


@router.get("/me")
async def get_me(
    token: Optional[str] = Depends(get_session_token),
    service: AuthService = Depends(get_auth_service),
):
    """Get the current user profile from the token cookie."""
    return _respond(await service.get_current_user(token))
