"""
Gatekeeper middleware.

Runs the session gatekeeper on every HTTP request before routing and
turns a redirect decision into a 307 response.
"""

from fastapi import Request
from fastapi.responses import RedirectResponse

from app.services.gatekeeper import Gatekeeper


class GatekeeperMiddleware:
    """ASGI middleware applying ``Gatekeeper.decide`` to each request."""

    def __init__(self, app, gatekeeper: Gatekeeper):
        self.app = app
        self.gatekeeper = gatekeeper

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http":
            request = Request(scope, receive)
            decision = self.gatekeeper.decide(request.url.path, request.cookies)
            if not decision.allowed:
                response = RedirectResponse(url=decision.redirect_to)
                await response(scope, receive, send)
                return

        await self.app(scope, receive, send)
