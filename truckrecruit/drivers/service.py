"""Driver directory: candidate search, driver profile reads and self-updates.

Contact fields (phone, email) are masked for recruiters until the pair has
been unlocked through the quota-gated unlock service.
"""

import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ..auth.models import Profile, UserRole
from ..database import parse_uuid
from ..unlocks.models import ContactUnlock
from .models import Availability, Driver

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


@dataclass
class DriverFilters:
    search: str | None = None
    location: str | None = None
    experience_min: int | None = None
    experience_max: int | None = None
    license_types: list[str] = field(default_factory=list)
    availability: Availability | None = None
    twic: bool | None = None
    hazmat: bool | None = None
    equipment: list[str] = field(default_factory=list)
    fit_score_min: float | None = None


def get_driver(db: Session, driver_id) -> Driver | None:
    uid = parse_uuid(driver_id)
    if uid is None:
        return None
    return (
        db.query(Driver)
        .options(joinedload(Driver.profile))
        .join(Profile, Profile.id == Driver.id)
        .filter(Driver.id == uid, Profile.is_active.is_(True))
        .first()
    )


def _overlaps(values: list | None, wanted: list[str]) -> bool:
    have = {v.lower() for v in (values or [])}
    return any(w.lower() in have for w in wanted)


def search_drivers(
    db: Session,
    filters: DriverFilters,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Driver], int]:
    """Filter active drivers, best fit score first. Returns (page, total matches)."""
    query = (
        db.query(Driver)
        .options(joinedload(Driver.profile))
        .join(Profile, Profile.id == Driver.id)
        .filter(Profile.is_active.is_(True))
    )
    if filters.search:
        term = f"%{filters.search.strip()}%"
        query = query.filter(or_(Profile.name.ilike(term), Driver.bio.ilike(term), Profile.location.ilike(term)))
    if filters.location:
        query = query.filter(Profile.location.ilike(f"%{filters.location.strip()}%"))
    if filters.experience_min is not None:
        query = query.filter(Driver.experience_years >= filters.experience_min)
    if filters.experience_max is not None:
        query = query.filter(Driver.experience_years <= filters.experience_max)
    if filters.availability:
        query = query.filter(Driver.availability == filters.availability)
    if filters.twic:
        query = query.filter(Driver.twic_card.is_(True))
    if filters.hazmat:
        query = query.filter(Driver.hazmat_endorsement.is_(True))
    if filters.fit_score_min is not None:
        query = query.filter(Driver.fit_score >= filters.fit_score_min)

    limit = max(1, min(limit, MAX_PAGE_SIZE))
    offset = max(offset, 0)
    ordered = query.order_by(Driver.fit_score.desc(), Driver.experience_years.desc())

    if not filters.license_types and not filters.equipment:
        return ordered.offset(offset).limit(limit).all(), query.count()

    # JSON list columns are matched in Python so SQLite and PostgreSQL agree
    drivers = ordered.all()
    if filters.license_types:
        drivers = [d for d in drivers if _overlaps(d.license_types, filters.license_types)]
    if filters.equipment:
        drivers = [d for d in drivers if _overlaps(d.equipment_experience, filters.equipment)]
    return drivers[offset : offset + limit], len(drivers)


def unlocked_driver_ids(db: Session, recruiter_id: UUID) -> set[UUID]:
    rows = db.query(ContactUnlock.driver_id).filter(ContactUnlock.recruiter_id == recruiter_id).all()
    return {r[0] for r in rows}


def can_view_contact(viewer: Profile, driver: Driver, unlocked_ids: set[UUID]) -> bool:
    if viewer.role == UserRole.ADMIN or viewer.id == driver.id:
        return True
    return viewer.role == UserRole.RECRUITER and driver.id in unlocked_ids


def driver_to_dict(driver: Driver, show_contact: bool) -> dict:
    profile = driver.profile
    return {
        "id": str(driver.id),
        "name": profile.name,
        "location": profile.location,
        "profile_image": profile.profile_image,
        "experience_years": driver.experience_years or 0,
        "license_types": list(driver.license_types or []),
        "twic_card": bool(driver.twic_card),
        "hazmat_endorsement": bool(driver.hazmat_endorsement),
        "availability": driver.availability.value if driver.availability else None,
        "preferred_routes": list(driver.preferred_routes or []),
        "equipment_experience": list(driver.equipment_experience or []),
        "fit_score": float(driver.fit_score or 0),
        "profile_completion": driver.profile_completion or 0,
        "documents_verified": bool(driver.documents_verified),
        "bio": driver.bio,
        "contact_unlocked": show_contact,
        "phone": profile.phone if show_contact else None,
        "email": profile.email if show_contact else None,
    }


def compute_profile_completion(driver: Driver) -> int:
    """Share of the profile checklist the driver has filled in, 0-100."""
    profile = driver.profile
    checks = [
        bool(profile.phone),
        bool(profile.location),
        bool(profile.profile_image),
        bool(driver.bio),
        (driver.experience_years or 0) > 0,
        bool(driver.license_types),
        bool(driver.equipment_experience),
        bool(driver.preferred_routes),
    ]
    return round(100 * sum(checks) / len(checks))


def update_driver(db: Session, driver: Driver, changes: dict) -> Driver:
    """Apply a partial update to the driver's own record and refresh completion."""
    for key, value in changes.items():
        if key == "availability" and value is not None:
            value = Availability(value)
        setattr(driver, key, value)
    driver.profile_completion = compute_profile_completion(driver)
    db.flush()
    logger.debug("Driver %s updated: %s", driver.id, sorted(changes))
    return driver
