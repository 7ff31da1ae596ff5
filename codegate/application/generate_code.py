import logging

from codegate.application.registry import CodeRegistry
from codegate.domain.entities import CodeKind, RequestContext, ValidateCode, session_key
from codegate.domain.errors import GenerationError, SendError
from codegate.domain.ports.code_store import CodeStorePort

logger = logging.getLogger("codegate.application.generate_code")


async def generate_code(
    registry: CodeRegistry,
    store: CodeStorePort,
    request: RequestContext,
    kind: CodeKind,
    key_prefix: str,
    destination: str | None = None,
) -> ValidateCode:
    generator = registry.generator_for(kind)
    code = await generator.generate(request)
    if code.is_expired():
        raise GenerationError(f"{kind.value} generator returned an expired code")

    sender = registry.sender_for(kind)
    if sender is not None:
        if not destination:
            raise SendError(f"no destination given for {kind.value} code")
        await sender.send(destination, code)

    # Only store what was actually delivered.
    await store.put(request.session_id, session_key(key_prefix, kind), code)
    logger.info(
        "verification code issued",
        extra={"kind": kind.value, "expire_time": code.expire_time.isoformat()},
    )
    return code
