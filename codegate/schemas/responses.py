from typing import Literal

from pydantic import BaseModel, Field


class AcceptedOut(BaseModel):
    status: Literal["accepted"] = "accepted"


class OkOut(BaseModel):
    status: Literal["ok"] = "ok"


class CodeIssuedOut(AcceptedOut):
    expires_at: str = Field(..., description="ISO-8601 expiry of the issued code")
