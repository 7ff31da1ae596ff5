from __future__ import annotations

from enum import Enum


class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class ValidateCodeErrorKind(str, Enum):
    EMPTY_SUBMISSION = "EMPTY_SUBMISSION"
    CODE_NOT_FOUND = "CODE_NOT_FOUND"
    CODE_EXPIRED = "CODE_EXPIRED"
    CODE_MISMATCH = "CODE_MISMATCH"


_DEFAULT_MESSAGES = {
    ValidateCodeErrorKind.EMPTY_SUBMISSION: "verification code must not be empty",
    ValidateCodeErrorKind.CODE_NOT_FOUND: "verification code does not exist",
    ValidateCodeErrorKind.CODE_EXPIRED: "verification code has expired",
    ValidateCodeErrorKind.CODE_MISMATCH: "verification code does not match",
}


class ValidateCodeError(DomainError):
    """A submitted code was rejected. Always request-scoped, never fatal."""

    def __init__(self, kind: ValidateCodeErrorKind, message: str | None = None):
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGES[kind]
        super().__init__(self.message)


class CodeDeliveryError(DomainError):
    """Base class for failures on the generate side (before anything is stored)."""

    pass


class GenerationError(CodeDeliveryError):
    """A generator could not produce a code (rendering or backend failure)."""

    pass


class SendError(CodeDeliveryError):
    """A sender could not deliver a code to its destination."""

    pass


class UnsupportedCodeKind(DomainError):
    """No generator is registered for the requested code kind."""

    pass
