"""Request and response models for sign-up, login and session redirects."""

from pydantic import BaseModel, field_validator

from booksmart import validation
from booksmart.auth.passwords import MAX_PASSWORD_BYTES

MIN_PASSWORD_LENGTH = 8


class SignupRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return validation.require_text(value)

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return validation.validate_email(value).lower()

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
        if len(value.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValueError(f'Password must be {MAX_PASSWORD_BYTES} bytes or fewer.')
        return value


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return validation.require_text(value).lower()


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    redirect_to: str


class UserResponse(BaseModel):
    email: str
    name: str

    class Config:
        from_attributes = True


class RedirectTargetResponse(BaseModel):
    redirect_to: str
