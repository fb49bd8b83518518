"""Recruiter request schemas."""

from pydantic import BaseModel, Field, HttpUrl, field_validator


class RecruiterUpdate(BaseModel):
    company_name: str | None = Field(None, min_length=2, max_length=100)
    company_size: str | None = Field(None, max_length=50)
    website: HttpUrl | None = None

    @field_validator("company_name", mode="before")
    @classmethod
    def reject_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("may be omitted but not null")
        return v

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        if data.get("website") is not None:
            data["website"] = str(data["website"])
        return data
