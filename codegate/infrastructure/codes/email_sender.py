from __future__ import annotations

import logging
import math

from codegate.domain.entities import ValidateCode, utc_now
from codegate.domain.errors import SendError
from codegate.domain.ports.email_port import EmailPort

logger = logging.getLogger("codegate.infrastructure.codes.email_sender")


class EmailCodeSender:
    """Delivers a code by email through any EmailPort."""

    def __init__(
        self, email: EmailPort, *, subject: str = "Your verification code"
    ) -> None:
        self._email = email
        self._subject = subject

    async def send(self, destination: str, code: ValidateCode) -> None:
        minutes = max(1, math.ceil((code.expire_time - utc_now()).total_seconds() / 60))
        body = f"Your code is {code.value}. It expires in {minutes} minute(s)."
        try:
            await self._email.send(to=destination, subject=self._subject, body=body)
        except SendError as e:
            logger.warning(
                "verification email failed", extra={"to": destination, "error": str(e)}
            )
            raise
        logger.info("verification email sent", extra={"to": destination})
