from __future__ import annotations

import secrets

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

SESSION_STATE_KEY = "session_id"


def get_scope_session_id(scope: Scope) -> str | None:
    return scope.get("state", {}).get(SESSION_STATE_KEY)


class SessionIdMiddleware:
    """
    Reads the session id from its cookie, or issues a new one, and exposes it
    as `request.state.session_id`. Codes are stored per session id.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        cookie_name: str = "CODEGATE_SESSION",
        max_age: int = 1800,
    ) -> None:
        self.app = app
        self.cookie_name = cookie_name
        self.max_age = max_age

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        session_id = HTTPConnection(scope).cookies.get(self.cookie_name)
        issued = not session_id
        if issued:
            session_id = secrets.token_urlsafe(32)
        scope.setdefault("state", {})[SESSION_STATE_KEY] = session_id

        async def send_with_cookie(message: Message) -> None:
            if issued and message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers.append(
                    "set-cookie",
                    f"{self.cookie_name}={session_id}; Path=/; Max-Age={self.max_age}; "
                    "HttpOnly; SameSite=lax",
                )
            await send(message)

        await self.app(scope, receive, send_with_cookie)
