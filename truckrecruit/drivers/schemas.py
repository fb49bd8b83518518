"""Driver request schemas."""

from pydantic import BaseModel, Field, field_validator

from .models import Availability


class DriverUpdate(BaseModel):
    experience_years: int | None = Field(None, ge=0, le=50)
    license_types: list[str] | None = Field(None, min_length=1)
    twic_card: bool | None = None
    hazmat_endorsement: bool | None = None
    availability: Availability | None = None
    preferred_routes: list[str] | None = None
    equipment_experience: list[str] | None = None
    bio: str | None = Field(None, max_length=1000)

    @field_validator("experience_years", "availability", "twic_card", "hazmat_endorsement", mode="before")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("may be omitted but not null")
        return v
