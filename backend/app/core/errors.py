"""
Authentication error taxonomy.

Every failure the auth service can report is an ``AuthError`` subclass
carrying a short tag and a human-readable default message. The service
raises them internally and turns them into ``AuthResult`` failures at its
boundary.
"""


class AuthError(Exception):
    """Base authentication error."""

    code = "auth_error"
    default_message = "Authentication failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class StoreError(AuthError):
    """Credential store unreachable or rejected the query."""

    code = "store_error"
    default_message = "Credential store is unavailable."


class DuplicateEmail(AuthError):
    """A profile with this email already exists."""

    code = "duplicate_email"
    default_message = "User already exists with this email."


class NotFound(AuthError):
    """No profile matches the lookup."""

    code = "not_found"
    default_message = "User not found with this email."


class InvalidCredentials(AuthError):
    """Password does not match the stored hash."""

    code = "invalid_credentials"
    default_message = "Invalid password."


class UnauthorizedRole(AuthError):
    """Stored role differs from the role the client asked for."""

    code = "unauthorized_role"
    default_message = "Unauthorized role access."


class MissingToken(AuthError):
    code = "missing_token"
    default_message = "Authentication token is missing."


class InvalidToken(AuthError):
    """Token is malformed, expired or carries a bad signature."""

    code = "invalid_token"
    default_message = "Invalid or expired token."


class InvalidRole(AuthError):
    """Role is neither ``job-seeker`` nor ``recruiter``."""

    code = "invalid_role"
    default_message = "Role must be 'job-seeker' or 'recruiter'."
