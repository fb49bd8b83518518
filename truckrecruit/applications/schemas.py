"""Job posting and application request schemas."""

from pydantic import BaseModel, Field, model_validator

from .models import ApplicationStatus


class JobCreate(BaseModel):
    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=50, max_length=5000)
    location: str = Field(..., min_length=2, max_length=100)
    job_type: str = Field(..., min_length=1, max_length=50)
    salary_min: int | None = Field(None, ge=0)
    salary_max: int | None = Field(None, ge=0)
    requirements: list[str] = Field(..., min_length=1)
    benefits: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _salary_range(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_max < self.salary_min:
            raise ValueError("salary_max must be greater than or equal to salary_min")
        return self


class ApplicationCreate(BaseModel):
    job_id: str
    cover_letter: str | None = Field(None, max_length=2000)


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus
    notes: str | None = Field(None, max_length=1000)
