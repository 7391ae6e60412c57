"""
Request / response schemas for the account endpoints.

Field names travel in camelCase on the wire (``fullName``, ``keepMeSignedIn``).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from auth.password import MAX_PASSWORD_BYTES, password_fits


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateUserRequest(CamelModel):
    full_name: str
    email: str
    password: str
    username: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, v: str) -> str:
        if not password_fits(v):
            raise ValueError(f"password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(CamelModel):
    email: str
    password: str
    keep_me_signed_in: bool = False


class DeleteUserRequest(CamelModel):
    email: str
    password: str


class UpdateUserRequest(CamelModel):
    full_name: str
    email: str
    color: int


class OnboardingAnswers(CamelModel):
    user_type: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    phone_number: Optional[str] = None
    organization_name: Optional[str] = None
    organization_size: Optional[str] = None
    project_type: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str


class UserResponse(CamelModel):
    """Everything on the user record except the password hash."""

    id: uuid.UUID
    email: str
    full_name: Optional[str] = None
    username: Optional[str] = None
    created_at: Optional[datetime] = None
    role: str = "user"
    user_type: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    phone_number: Optional[str] = None
    organization_name: Optional[str] = None
    organization_size: Optional[str] = None
    project_type: Optional[str] = None
    onboarding: bool = False
    color: int
    notifications: List[Any] = Field(default_factory=list)
    projects: List[Any] = Field(default_factory=list)
    docs: List[Any] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user: Any) -> "UserResponse":
        return cls(
            id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            username=user.username,
            created_at=user.created_at,
            role=user.role,
            user_type=user.user_type,
            gender=user.gender,
            date_of_birth=user.date_of_birth,
            phone_number=user.phone_number,
            organization_name=user.organization_name,
            organization_size=user.organization_size,
            project_type=user.project_type,
            onboarding=user.onboarding,
            color=user.color,
            notifications=list(user.notifications or []),
            projects=list(user.projects or []),
            docs=list(user.docs or []),
        )
