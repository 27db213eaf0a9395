"""Authentication schemas."""

from datetime import datetime

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

from src.schemas.common import blank_to_none


class UserRegister(BaseModel):
    """User registration request. ``name`` is accepted as an alias of ``username``."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("username", "name"),
    )
    email: EmailStr | None = None
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, value):
        return blank_to_none(value)


class UserLogin(BaseModel):
    """User login request, by email or by username."""

    email: EmailStr | None = None
    username: str | None = Field(
        None,
        max_length=255,
        validation_alias=AliasChoices("username", "name"),
    )
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email", "username", mode="before")
    @classmethod
    def blank_is_none(cls, value):
        return blank_to_none(value)

    @model_validator(mode="after")
    def require_identifier(self) -> "UserLogin":
        if not self.email and not self.username:
            raise ValueError("Email or username is required")
        return self


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str | None
    created_at: datetime | None = None


class RegisterResponse(BaseModel):
    """Registration result."""

    message: str
    id: int


class LoginResponse(BaseModel):
    """Login result. ``token`` is only set when tokens are the auth strategy."""

    message: str
    user: UserResponse
    token: str | None = None
    token_type: str | None = None


class MeResponse(BaseModel):
    """Current user response."""

    user: UserResponse
