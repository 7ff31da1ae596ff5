from __future__ import annotations

from typing import Optional, Protocol

from codegate.domain.entities import ValidateCode


class CodeStorePort(Protocol):
    """
    Session-scoped keyed store. Validity is decided by the code's own
    expire_time; the store only has to keep values for the session lifetime.
    Last write wins per (session_id, key).
    """

    async def put(self, session_id: str, key: str, code: ValidateCode) -> None:
        """Store/replace the code under `key` for this session."""

    async def get(self, session_id: str, key: str) -> Optional[ValidateCode]:
        """Return the stored code, or None when absent."""

    async def remove(self, session_id: str, key: str) -> None:
        """Delete the code (no-op when absent)."""
