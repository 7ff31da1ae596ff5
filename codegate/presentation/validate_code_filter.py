from __future__ import annotations

import json
import logging
from urllib.parse import parse_qsl

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from codegate.application.validate_code import validate_code
from codegate.domain.errors import ValidateCodeError
from codegate.domain.path_matcher import PathRuleSet
from codegate.domain.ports.code_store import CodeStorePort
from codegate.presentation.failure_handler import FailureHandler
from codegate.presentation.session import get_scope_session_id

logger = logging.getLogger("codegate.presentation.validate_code_filter")

DEFAULT_MAX_BODY_BYTES = 64 * 1024


class BodyTooLarge(Exception):
    pass


async def _read_body(receive: Receive, limit: int) -> bytes:
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunk = message.get("body", b"")
        size += len(chunk)
        if size > limit:
            raise BodyTooLarge()
        chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def _replay(body: bytes, receive: Receive) -> Receive:
    """Hand the already-read body to the next app, then defer to `receive`."""
    sent = False

    async def replay() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


def _submitted_value(request: Request, body: bytes, name: str) -> str | None:
    value = request.query_params.get(name)
    if value is not None:
        return value

    content_type = request.headers.get("content-type", "").split(";", 1)[0].strip()
    if content_type == "application/x-www-form-urlencoded":
        text = body.decode("utf-8", errors="replace")
        for key, val in parse_qsl(text, keep_blank_values=True):
            if key == name:
                return val
    elif content_type == "application/json" and body:
        try:
            payload = json.loads(body)
        except ValueError:
            return None
        if isinstance(payload, dict) and isinstance(payload.get(name), str):
            return payload[name]
    return None


def check_configuration(
    rules: PathRuleSet | None,
    failure_handler: FailureHandler | None,
    store: CodeStorePort | None,
) -> None:
    """Raise ValueError unless the gate has everything it needs to run."""
    if rules is None or len(rules) == 0:
        raise ValueError("ValidateCodeMiddleware requires a non-empty rule set")
    if not callable(getattr(failure_handler, "on_failure", None)):
        raise ValueError("ValidateCodeMiddleware requires a failure handler")
    if store is None:
        raise ValueError("ValidateCodeMiddleware requires a code store")


class ValidateCodeMiddleware:
    """
    Gate in front of the application: requests whose path matches a rule must
    carry the code stored for their session, otherwise the failure handler
    answers and the request goes no further.

    The code is looked up in the query string, then in an urlencoded form or
    JSON object body. Multipart bodies are not searched. Bodies of intercepted
    requests are buffered up to `max_body_bytes`; larger ones get a 413.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        rules: PathRuleSet,
        failure_handler: FailureHandler,
        store: CodeStorePort,
        key_prefix: str = "SESSION_KEY_",
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
    ) -> None:
        check_configuration(rules, failure_handler, store)
        self.app = app
        self.rules = rules
        self.failure_handler = failure_handler
        self.store = store
        self.key_prefix = key_prefix
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rule = self.rules.match(scope["path"])
        if rule is None:
            await self.app(scope, receive, send)
            return

        session_id = get_scope_session_id(scope)
        if session_id is None:
            raise RuntimeError(
                "no session id on the request; install SessionIdMiddleware outside "
                "ValidateCodeMiddleware"
            )

        try:
            body = await _read_body(receive, self.max_body_bytes)
        except BodyTooLarge:
            logger.info(
                "intercepted request body too large",
                extra={"path": scope["path"], "limit": self.max_body_bytes},
            )
            response = JSONResponse(
                status_code=413,
                content={"detail": "request body too large"},
            )
            await response(scope, receive, send)
            return

        receive = _replay(body, receive)
        request = Request(scope, receive)
        submitted = _submitted_value(request, body, rule.kind.param_name)

        try:
            await validate_code(
                self.store,
                session_id,
                rule.kind,
                submitted,
                key_prefix=self.key_prefix,
            )
        except ValidateCodeError as e:
            logger.info(
                "verification code rejected",
                extra={"path": scope["path"], "kind": rule.kind.value, "error": e.kind.value},
            )
            response = await self.failure_handler.on_failure(request, e)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
