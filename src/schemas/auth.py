"""Pydantic schemas for authentication endpoints."""
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Shape check only; the identity service validates the address itself
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 6


def validate_email_format(value: str) -> str:
    """Normalize an email address and check its basic shape."""
    normalized = value.strip().lower()
    if not _EMAIL_PATTERN.match(normalized):
        raise ValueError("Enter a valid email address.")
    return normalized


class LoginRequest(BaseModel):
    """Email/password credentials."""

    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize and validate the email."""
        return validate_email_format(v)


class SignupRequest(BaseModel):
    """Signup form: credentials plus confirmation and terms agreement."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    confirm_password: str = Field(alias="confirmPassword")
    agree: bool

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize and validate the email."""
        return validate_email_format(v)

    @field_validator("agree")
    @classmethod
    def require_agreement(cls, v: bool) -> bool:
        """The terms of service must be accepted."""
        if not v:
            raise ValueError("You must agree to the terms of service.")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "SignupRequest":
        """Password and confirmation must be identical."""
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class SessionUser(BaseModel):
    """Identity carried by a valid session."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(serialization_alias="userId")
    email: str | None = None


class LoginResponse(BaseModel):
    """Issued session token plus the resolved identity."""

    token: str
    user: SessionUser
