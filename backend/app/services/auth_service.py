"""
Auth Service.

Orchestrates the credential store, the password hasher and the token codec
for ``register``, ``login`` and ``get_current_user``. Every operation
returns an ``AuthResult``; ``AuthError`` never escapes this module.
"""

from typing import Optional

from starlette.concurrency import run_in_threadpool

from app.core.errors import (
    AuthError,
    DuplicateEmail,
    InvalidCredentials,
    InvalidRole,
    MissingToken,
    NotFound,
    StoreError,
    UnauthorizedRole,
)
from app.core.logger import get_logger
from app.core.security import PasswordHasher, TokenCodec
from app.models import ROLES
from app.schemas.auth import AuthResult, UserPublic
from app.services.credential_store import CredentialStore, normalize_email

logger = get_logger("auth_service")


def _failure(error: AuthError) -> AuthResult:
    return AuthResult(success=False, message=error.message, error=error.code)


class AuthService:
    """Registration, login and session resolution over injected collaborators."""

    def __init__(self, store: CredentialStore, hasher: PasswordHasher, codec: TokenCodec):
        self.store = store
        self.hasher = hasher
        self.codec = codec

    async def register(self, name: str, email: str, password: str, role: str) -> AuthResult:
        """
        Create a new profile.

        Fails with ``StoreError`` when the store cannot be queried or written,
        with ``DuplicateEmail`` when the email is already taken and with
        ``InvalidRole`` for anything but a job seeker or a recruiter.
        """
        email = normalize_email(email)
        try:
            if role not in ROLES:
                raise InvalidRole()

            existing = await self.store.find_by_email(email)
            if existing:
                raise DuplicateEmail()

            password_hash = await run_in_threadpool(self.hasher.hash, password)

            profile = await self.store.insert({
                "name": name,
                "email": email,
                "password_hash": password_hash,
                "role": role,
            })
        except AuthError as e:
            logger.warning(f"Registration rejected for {email}: {e.code}")
            return _failure(e)

        logger.info(f"Registered {profile.role} {email} ({profile.id})")
        return AuthResult(success=True, message="User registered successfully")

    async def login(self, email: str, password: str, role: Optional[str]) -> AuthResult[str]:
        """
        Check credentials and mint a session token.

        The role comparison keeps a recruiter from signing in through the
        job-seeker form; it is not an authorization check.
        """
        email = normalize_email(email)
        try:
            try:
                matches = await self.store.find_by_email(email)
            except StoreError as e:
                raise NotFound() from e
            if len(matches) != 1:
                raise NotFound()
            user = matches[0]

            is_valid = await run_in_threadpool(self.hasher.verify, password, user.password_hash)
            if not is_valid:
                raise InvalidCredentials()

            if user.role != role:
                raise UnauthorizedRole()
        except AuthError as e:
            logger.warning(f"Login failed for {email}: {e.code}")
            return _failure(e)

        token = self.codec.sign({"sub": user.id, "email": user.email, "role": user.role})
        logger.info(f"Login: {user.email} ({user.role})")
        return AuthResult(success=True, message="Login successful", data=token)

    async def get_current_user(self, token: Optional[str]) -> AuthResult[UserPublic]:
        """
        Resolve a bearer token to the profile it was issued for.

        The lookup is keyed by the ``sub`` claim (the immutable profile id).
        The returned profile never carries the password hash.
        """
        try:
            if not token:
                raise MissingToken()

            claims = self.codec.verify(token)

            user = await self.store.get_by_id(claims["sub"])
            if user is None:
                raise NotFound("User not found.")
        except AuthError as e:
            logger.debug(f"Session rejected: {e.code}")
            return _failure(e)

        return AuthResult(
            success=True,
            message="User fetched successfully",
            data=UserPublic.model_validate(user),
        )
