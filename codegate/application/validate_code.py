import logging
from datetime import datetime

import codegate.domain.services as domain_services
from codegate.domain.entities import CodeKind, session_key, utc_now
from codegate.domain.errors import ValidateCodeError, ValidateCodeErrorKind
from codegate.domain.ports.code_store import CodeStorePort

logger = logging.getLogger("codegate.application.validate_code")


async def validate_code(
    store: CodeStorePort,
    session_id: str,
    kind: CodeKind,
    submitted: str | None,
    key_prefix: str,
    now: datetime | None = None,
) -> None:
    """
    Check `submitted` against the code stored for (session_id, kind).

    Returns on success (the stored code is consumed), raises ValidateCodeError
    otherwise. Expired codes are removed; a mismatch leaves the stored code in
    place so it can be retried until it expires.
    """
    key = session_key(key_prefix, kind)

    if submitted is None or not submitted.strip():
        raise ValidateCodeError(ValidateCodeErrorKind.EMPTY_SUBMISSION)

    stored = await store.get(session_id, key)
    if stored is None:
        raise ValidateCodeError(ValidateCodeErrorKind.CODE_NOT_FOUND)

    if stored.is_expired(now or utc_now()):
        await store.remove(session_id, key)
        raise ValidateCodeError(ValidateCodeErrorKind.CODE_EXPIRED)

    if not domain_services.secure_compare(stored.value, submitted):
        raise ValidateCodeError(ValidateCodeErrorKind.CODE_MISMATCH)

    await store.remove(session_id, key)
    logger.info("verification code accepted", extra={"kind": kind.value})
