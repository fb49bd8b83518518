"""Authentication and profile request/response schemas."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from .models import UserRole

NAME_PATTERN = r"^[a-zA-Z\s'-]+$"
PHONE_PATTERN = r"^\+?[\d\s\-\(\)]+$"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=255)


class SignupRequest(BaseModel):
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=2, max_length=100, pattern=NAME_PATTERN)
    role: UserRole = UserRole.DRIVER
    company_name: str | None = Field(None, min_length=2, max_length=100)
    phone: str | None = Field(None, max_length=50, pattern=PHONE_PATTERN)
    location: str | None = Field(None, max_length=100)


class ProfileUpdate(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=100)
    phone: str | None = Field(None, max_length=50, pattern=PHONE_PATTERN)
    location: str | None = Field(None, max_length=100)
    profile_image: str | None = Field(None, max_length=500)

    @field_validator("name", mode="before")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    role: UserRole
    phone: str | None = None
    location: str | None = None
    profile_image: str | None = None
    is_active: bool


def profile_to_dict(profile) -> dict:
    return UserResponse(
        id=str(profile.id),
        email=profile.email,
        name=profile.name,
        role=profile.role,
        phone=profile.phone,
        location=profile.location,
        profile_image=profile.profile_image,
        is_active=bool(profile.is_active),
    ).model_dump(mode="json")
