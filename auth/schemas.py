from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from user.schemas import UserSchema


class LoginPayload(BaseModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=100)
    passcode: str = Field(..., min_length=1)
    employee_id: Optional[str] = Field(None, max_length=32)


class LoginResponse(BaseModel):
    user: UserSchema
    access_token: str
    token_type: str = "bearer"
