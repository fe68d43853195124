from app.services.auth_service import AuthService
from app.services.credential_store import CredentialStore, SqlCredentialStore, normalize_email
from app.services.gatekeeper import GateDecision, Gatekeeper

__all__ = [
    "AuthService",
    "CredentialStore",
    "SqlCredentialStore",
    "normalize_email",
    "GateDecision",
    "Gatekeeper",
]
