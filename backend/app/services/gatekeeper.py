"""
Session Gatekeeper.

Decides, per request, whether a navigation proceeds or is redirected,
using only the ``token`` and ``role`` cookies and the path's category:

- private route without a token      -> redirect to ``/login``
- public route with a token          -> redirect to ``/{role}/dashboard``
- anything else                      -> allow

By default the role cookie is a routing hint: neither the token's
signature nor its expiry is checked here, so a stale token still gets
redirected to a dashboard until ``get_current_user`` rejects it. With
``verify_token`` enabled the token is decoded first and the role is taken
from its claims.
"""

import re
from dataclasses import dataclass
from typing import Mapping, Optional

from app.core.errors import InvalidToken
from app.core.logger import get_logger
from app.core.security import TokenCodec
from app.models import ROLES

logger = get_logger("gatekeeper")

LOGIN_PATH = "/login"
PRIVATE_PREFIXES = ("/job-seeker", "/recruiter")

# Never gated
EXCLUDED_PREFIXES = ("/api", "/docs", "/redoc", "/openapi.json", "/health", "/static")
STATIC_ASSET_RE = re.compile(
    r"\.(?:html?|css|js(?!on)|jpe?g|webp|png|gif|svg|ttf|woff2?|ico|csv|docx?|xlsx?|zip|webmanifest)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class GateDecision:
    """``redirect_to`` is ``None`` when the request is allowed through."""

    redirect_to: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.redirect_to is None

    @classmethod
    def allow(cls) -> "GateDecision":
        return cls()

    @classmethod
    def redirect(cls, path: str) -> "GateDecision":
        return cls(redirect_to=path)


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_private(path: str) -> bool:
    return any(_under(path, prefix) for prefix in PRIVATE_PREFIXES)


def is_gated(path: str) -> bool:
    """False for API calls, docs and static assets."""
    if any(_under(path, prefix) for prefix in EXCLUDED_PREFIXES):
        return False
    return not STATIC_ASSET_RE.search(path)


def dashboard_path(role: Optional[str]) -> str:
    """Dashboard for a role, or the login page when the role is unknown."""
    if role not in ROLES:
        return LOGIN_PATH
    return f"/{role}/dashboard"


class Gatekeeper:
    """Per-request allow/redirect filter. Never raises."""

    def __init__(
        self,
        token_cookie: str = "token",
        role_cookie: str = "role",
        codec: Optional[TokenCodec] = None,
        verify_token: bool = False,
    ):
        self.token_cookie = token_cookie
        self.role_cookie = role_cookie
        self.codec = codec
        self.verify_token = verify_token and codec is not None

    def _session(self, cookies: Mapping[str, str]) -> tuple[Optional[str], Optional[str]]:
        """Return ``(token, role)`` as far as this gatekeeper trusts them."""
        token = cookies.get(self.token_cookie) or None
        role = cookies.get(self.role_cookie) or None
        if token and self.verify_token:
            try:
                claims = self.codec.verify(token)
            except InvalidToken:
                return None, None
            role = claims.get("role")
        return token, role

    def decide(self, path: str, cookies: Mapping[str, str]) -> GateDecision:
        if not is_gated(path):
            return GateDecision.allow()

        token, role = self._session(cookies)

        if is_private(path):
            if not token:
                logger.debug(f"No session for {path}, redirecting to {LOGIN_PATH}")
                return GateDecision.redirect(LOGIN_PATH)
            return GateDecision.allow()

        if token:
            target = dashboard_path(role)
            if target == path:
                return GateDecision.allow()
            logger.debug(f"Session present on public {path}, redirecting to {target}")
            return GateDecision.redirect(target)

        return GateDecision.allow()
