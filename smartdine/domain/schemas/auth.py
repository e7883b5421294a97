"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional

from smartdine.domain.models.user import UserRole

PASSWORD_MIN_LENGTH = 6


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=30)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)

    @field_validator("name", "phone", mode="before")
    @classmethod
    def strip_text(cls, v):
        # passwords are left untouched
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole
    is_active: bool
    is_email_verified: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class OwnedRestaurant(BaseModel):
    id: int
    name: str
    slug: str
    is_active: bool
    is_published: bool

    model_config = {"from_attributes": True}


class UserProfile(UserRead):
    restaurants: list[OwnedRestaurant] = []


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class AuthData(BaseModel):
    user: UserRead


class TokenResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    data: AuthData
    verification_token: Optional[str] = None  # development only, when auto-verify is off


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)

    model_config = {"str_strip_whitespace": True}


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ResetPasswordRequest(BaseModel):
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
