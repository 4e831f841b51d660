from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from typing import Optional


# ----- Generic Response -----
class Message(BaseModel):
    message: str


# ----- Auth Schemas -----
class LoginRequest(BaseModel):
    email: str = Field(
        ..., min_length=1, description="Registered user email"
    )
    password: str = Field(
        ..., min_length=1, description="User password"
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RegisterRequest(BaseModel):
    name: str = Field(
        ..., min_length=1, description="Display name"
    )
    email: str = Field(
        ..., min_length=1, description="Email address"
    )
    password: str = Field(
        ..., min_length=1, description="Account password"
    )

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class VerifyEmailRequest(BaseModel):
    email: str = Field(
        ..., min_length=1, description="Email the code was sent to"
    )
    code: str = Field(
        ..., min_length=6, max_length=6, description="6-digit verification code"
    )

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr = Field(
        ..., description="Registered email address"
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v


class ResetPasswordRequest(BaseModel):
    email: str = Field(
        ..., min_length=1, description="Email the reset code was sent to"
    )
    reset_code: str = Field(
        ..., min_length=1, description="Verification code from the reset email"
    )
    new_password: str = Field(
        ..., min_length=6, description="At least 6 characters"
    )
    confirm_password: str = Field(
        ..., description="Must match new_password"
    )

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match.")
        return self


class TokenResponse(BaseModel):
    token: Optional[str] = None
    message: str
