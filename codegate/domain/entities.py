from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Mapping


class CodeKind(str, Enum):
    IMAGE = "IMAGE"
    EMAIL = "EMAIL"
    SMS = "SMS"

    @property
    def param_name(self) -> str:
        """Name of the request parameter carrying the submitted code."""
        return f"{self.value.lower()}Code"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ValidateCode:
    value: str
    expire_time: datetime
    kind: CodeKind = CodeKind.IMAGE

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("code value cannot be empty")
        if self.expire_time.tzinfo is None:
            raise ValueError("expire_time must be timezone-aware")

    @classmethod
    def with_ttl(
        cls,
        value: str,
        ttl_seconds: int,
        kind: CodeKind = CodeKind.IMAGE,
        now: datetime | None = None,
        **extra,
    ) -> "ValidateCode":
        now = now or utc_now()
        return cls(
            value=value,
            expire_time=now + timedelta(seconds=ttl_seconds),
            kind=kind,
            **extra,
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expire_time <= (now or utc_now())


@dataclass(frozen=True)
class ImageCode(ValidateCode):
    # Rendered PNG; only travels in the HTTP response, never into the store.
    image: bytes = field(default=b"", repr=False, compare=False)


@dataclass(frozen=True)
class RequestContext:
    """
    Framework-neutral view of an inbound request, handed to generators.
    """

    session_id: str
    path: str
    params: Mapping[str, str] = field(default_factory=dict)

    def get_int(self, name: str, default: int) -> int:
        raw = self.params.get(name)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            return default


def session_key(prefix: str, kind: CodeKind) -> str:
    """`<prefix><KIND>`, e.g. SESSION_KEY_IMAGE."""
    return f"{prefix}{kind.value}"
