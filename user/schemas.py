from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, ConfigDict


class UserSchema(BaseModel):
    id: int
    employee_id: Optional[str] = None
    email: EmailStr
    full_name: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


# Public view of another worker; no employee id
class UserPublic(BaseModel):
    id: int
    email: EmailStr
    full_name: str
    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    email: EmailStr
    full_name: str
    employee_id: Optional[str] = None
