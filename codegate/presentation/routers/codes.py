from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from codegate.application.generate_code import generate_code
from codegate.application.registry import CodeRegistry
from codegate.domain.entities import CodeKind, ImageCode, RequestContext
from codegate.domain.errors import CodeDeliveryError, UnsupportedCodeKind
from codegate.domain.ports.code_store import CodeStorePort
from codegate.presentation.dependencies import (
    get_code_registry,
    get_code_store,
    get_key_prefix,
    get_session_id,
)
from codegate.schemas.requests import EmailCodeIn
from codegate.schemas.responses import CodeIssuedOut

router = APIRouter(prefix="/code", tags=["Verification codes"])

_NO_CACHE = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _context(request: Request, session_id: str) -> RequestContext:
    return RequestContext(
        session_id=session_id,
        path=request.url.path,
        params=dict(request.query_params),
    )


@router.get("/image")
async def get_image_code(
    request: Request,
    session_id: Annotated[str, Depends(get_session_id)],
    registry: Annotated[CodeRegistry, Depends(get_code_registry)],
    store: Annotated[CodeStorePort, Depends(get_code_store)],
    key_prefix: Annotated[str, Depends(get_key_prefix)],
):
    try:
        code = await generate_code(
            registry,
            store,
            _context(request, session_id),
            CodeKind.IMAGE,
            key_prefix=key_prefix,
        )
    except UnsupportedCodeKind:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="image codes are disabled"
        )
    except CodeDeliveryError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        )

    if not isinstance(code, ImageCode) or not code.image:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="image generator returned no image",
        )
    return Response(content=code.image, media_type="image/png", headers=_NO_CACHE)


@router.post("/email", status_code=202, response_model=CodeIssuedOut)
async def post_email_code(
    body: EmailCodeIn,
    request: Request,
    session_id: Annotated[str, Depends(get_session_id)],
    registry: Annotated[CodeRegistry, Depends(get_code_registry)],
    store: Annotated[CodeStorePort, Depends(get_code_store)],
    key_prefix: Annotated[str, Depends(get_key_prefix)],
):
    try:
        code = await generate_code(
            registry,
            store,
            _context(request, session_id),
            CodeKind.EMAIL,
            key_prefix=key_prefix,
            destination=body.email,
        )
    except UnsupportedCodeKind:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="email codes are disabled"
        )
    except CodeDeliveryError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)
        )
    return CodeIssuedOut(expires_at=code.expire_time.isoformat())
