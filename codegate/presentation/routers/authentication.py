from fastapi import APIRouter

from codegate.domain.path_matcher import DEFAULT_LOGIN_PATTERN
from codegate.schemas.responses import OkOut

router = APIRouter(tags=["Authentication"])


# Stand-in for the host's login processing. The request only gets here once
# ValidateCodeMiddleware has accepted its image code.
@router.post(DEFAULT_LOGIN_PATTERN, response_model=OkOut)
async def post_login_form():
    return OkOut()
