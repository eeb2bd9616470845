from enum import Enum
import uuid

from pydantic import EmailStr, field_validator
from sqlmodel import Field, SQLModel

from locals_api.core.base_models import TimestampedTable, TimestampResponseMixin


class UserRole(str, Enum):
    """Platform roles.

    ADMIN: Can write to the translation store
    USER: Default role for self-registered accounts
    """

    ADMIN = "admin"
    USER = "user"


class UserBase(SQLModel):
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    role: UserRole = Field(default=UserRole.USER)


class User(UserBase, TimestampedTable, table=True):
    hashed_password: str


class UserCreate(UserBase):
    password: str = Field(min_length=8, max_length=128)


class SignupRequest(SQLModel):
    """Schema for self-registration.

    ``role`` is only honoured when ALLOW_SIGNUP_ROLE is enabled.
    """

    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=8, max_length=128)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    role: UserRole | None = None


class SigninRequest(SQLModel):
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=1, max_length=128)


class UserUpdateMe(SQLModel):
    email: EmailStr | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)

    # Omitting email keeps it; sending null would blank a required column
    @field_validator("email")
    @classmethod
    def validate_email_not_null(cls, v: EmailStr | None) -> EmailStr:
        if v is None:
            raise ValueError("email cannot be null")
        return v


class UserPublic(UserBase, TimestampResponseMixin):
    id: uuid.UUID


class SigninResponse(SQLModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Access token expiry in seconds
    data: UserPublic


class TokenPayload(SQLModel):
    sub: str | None = None
    email: str | None = None
    per: str | None = None  # role at the time the token was issued
