from __future__ import annotations

from typing import Protocol

from codegate.domain.entities import ValidateCode


class CodeSenderPort(Protocol):
    async def send(self, destination: str, code: ValidateCode) -> None:
        """Deliver the code out of band. Raise SendError on transport failure."""
