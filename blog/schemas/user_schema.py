from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Dict, List, Optional

from blog.models.user import UserStatus


class UserBase(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    phone_number: Optional[str] = Field(None, max_length=20)


class UserCreate(UserBase):
    email: EmailStr
    age: int = Field(..., ge=0)


class UserUpdate(UserBase):
    pass


class EmailUpdate(BaseModel):
    email: EmailStr


class StatusUpdate(BaseModel):
    status: UserStatus


class ResponseUser(UserBase):
    id: int
    email: str
    age: int
    status: UserStatus
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class ResponseUserSummary(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserStats(BaseModel):
    total: int
    by_status: Dict[UserStatus, int]
    by_age: Dict[int, int]
