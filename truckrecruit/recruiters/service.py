"""Recruiter company profile reads and updates."""

from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from .models import Recruiter


def get_recruiter(db: Session, recruiter_id: UUID) -> Recruiter | None:
    return (
        db.query(Recruiter)
        .options(joinedload(Recruiter.profile), joinedload(Recruiter.subscription))
        .filter(Recruiter.id == recruiter_id)
        .first()
    )


def update_recruiter(db: Session, recruiter: Recruiter, changes: dict) -> Recruiter:
    for key, value in changes.items():
        setattr(recruiter, key, value.strip() if isinstance(value, str) else value)
    db.flush()
    return recruiter


def recruiter_to_dict(recruiter: Recruiter) -> dict:
    profile = recruiter.profile
    return {
        "id": str(recruiter.id),
        "name": profile.name,
        "email": profile.email,
        "phone": profile.phone,
        "location": profile.location,
        "company_name": recruiter.company_name,
        "company_size": recruiter.company_size,
        "website": recruiter.website,
    }
