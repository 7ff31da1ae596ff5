from __future__ import annotations

from typing import Protocol

from codegate.domain.entities import RequestContext, ValidateCode


class CodeGeneratorPort(Protocol):
    async def generate(self, request: RequestContext) -> ValidateCode:
        """
        Produce a fresh code for the request.
        Raise GenerationError when the code cannot be produced.
        """
