"""Request models for the StockPulse API."""

from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only hashes the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class RegisterRequest(BaseModel):
    """Request model for account registration."""

    username: str = Field(..., description="Unique display name", min_length=3, max_length=30)
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(
        ..., description="Account password", min_length=6, max_length=MAX_PASSWORD_BYTES
    )

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        """Usernames are trimmed and may not contain whitespace."""
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("Username must not contain whitespace")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Emails are compared case-insensitively."""
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v):
        """Passwords must fit in bcrypt's input once UTF-8 encoded."""
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """Request model for login."""

    email: str = Field(..., description="Registered email address", min_length=1)
    password: str = Field(..., description="Account password", min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Emails are compared case-insensitively."""
        return v.strip().lower()
