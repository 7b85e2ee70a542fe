# tradejournal/models/user_model.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, validator

from tradejournal.utils.helpers import utcnow


def check_password_strength(v: str) -> str:
    if not any(char.isdigit() for char in v):
        raise ValueError("Password must contain at least one digit")
    if not any(char.isupper() for char in v):
        raise ValueError("Password must contain at least one uppercase letter")
    return v


class UserInDB(BaseModel):
    """User document in MongoDB"""

    email: EmailStr
    username: str
    full_name: Optional[str] = None
    hashed_password: str
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    # Journal preferences
    default_strategy: Optional[str] = None
    base_currency: str = "USD"


class UserBase(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)
    full_name: Optional[str] = None


class UserCreate(UserBase):
    password: str = Field(..., min_length=8, max_length=72)

    @validator("password")
    def validate_password(cls, v):
        return check_password_strength(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    default_strategy: Optional[str] = None
    base_currency: Optional[str] = Field(None, min_length=3, max_length=3)


class UserResponse(BaseModel):
    email: EmailStr
    username: str
    full_name: Optional[str] = None
    is_active: bool
    default_strategy: Optional[str] = None
    base_currency: str = "USD"
    created_at: datetime
    last_login: Optional[datetime] = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    email: Optional[str] = None


class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(..., min_length=8, max_length=72)

    @validator("new_password")
    def validate_password(cls, v):
        return check_password_strength(v)
