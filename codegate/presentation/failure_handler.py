from __future__ import annotations

from typing import Protocol

from fastapi import status
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from codegate.domain.errors import ValidateCodeError


class FailureHandler(Protocol):
    async def on_failure(self, request: Request, error: ValidateCodeError) -> Response:
        """
        Build the full response for a rejected request.
        Nothing else runs for this request afterwards.
        """


class JsonFailureHandler:
    def __init__(self, status_code: int = status.HTTP_401_UNAUTHORIZED) -> None:
        self._status_code = status_code

    async def on_failure(self, request: Request, error: ValidateCodeError) -> Response:
        return JSONResponse(
            status_code=self._status_code,
            content={"detail": error.message, "error": error.kind.value},
        )
