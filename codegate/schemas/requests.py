from pydantic import BaseModel, EmailStr, Field


class EmailCodeIn(BaseModel):
    email: EmailStr = Field(..., description="Where to send the code", max_length=255)
