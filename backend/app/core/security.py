"""
Security utilities for authentication and authorization.

Provides password hashing (bcrypt) and JWT token management.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from app.core.config import settings
from app.core.errors import InvalidToken


class PasswordHasher:
    """Salted one-way password hashing backed by bcrypt."""

    def __init__(self, rounds: int = settings.BCRYPT_ROUNDS):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: The plain text password to hash

        Returns:
            The hashed password string (salt included)
        """
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain password against a hashed password.

        Malformed or empty hashes never match. An empty password is checked
        like any other, so it round-trips with ``hash``.
        """
        if not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            return False


class TokenCodec:
    """Signs and verifies JWT session tokens with a server-held secret."""

    def __init__(
        self,
        secret: str = settings.SECRET_KEY,
        algorithm: str = settings.ALGORITHM,
        expires_minutes: int = settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes)

    def sign(self, claims: dict, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT access token.

        Args:
            claims: The data to encode in the token (``sub``, ``email``, ``role``)
            expires_delta: Optional custom lifetime, defaults to the codec's

        Returns:
            The encoded JWT token string
        """
        to_encode = claims.copy()

        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta if expires_delta is not None else self.expires_delta)
        to_encode.update({"iat": issued_at, "exp": expire})

        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        """
        Decode and validate a JWT access token.

        Raises:
            InvalidToken: on a bad signature, an expired token or garbage input
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except InvalidTokenError as e:
            raise InvalidToken(f"Invalid or expired token: {e}") from e
