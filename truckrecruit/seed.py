"""Demo candidate pool for local development (``SEED_DEMO_DATA=true``)."""

import logging
import secrets

from sqlalchemy.orm import Session

from .auth.models import Profile, UserRole
from .auth.service import get_user_by_email, hash_password
from .drivers.models import Availability, Driver

logger = logging.getLogger(__name__)

DEMO_DRIVERS = [
    {
        "name": "Michael Rodriguez",
        "email": "michael.rodriguez@example.com",
        "phone": "+1 (555) 123-4567",
        "location": "Dallas, TX",
        "experience_years": 8,
        "license_types": ["CDL-A"],
        "twic_card": True,
        "hazmat_endorsement": True,
        "preferred_routes": ["OTR", "Regional"],
        "equipment_experience": ["Dry Van", "Flatbed"],
        "fit_score": 9.2,
        "profile_completion": 95,
        "bio": "Experienced professional driver with 8 years of safe driving.",
    },
    {
        "name": "James Wilson",
        "email": "james.wilson@example.com",
        "phone": "+1 (555) 987-6543",
        "location": "Houston, TX",
        "experience_years": 5,
        "license_types": ["CDL-A"],
        "twic_card": False,
        "hazmat_endorsement": True,
        "preferred_routes": ["Regional", "Local"],
        "equipment_experience": ["Reefer", "Dry Van"],
        "fit_score": 8.8,
        "profile_completion": 88,
        "bio": "Reliable driver with experience in temperature-controlled freight.",
    },
    {
        "name": "Sarah Johnson",
        "email": "sarah.johnson@example.com",
        "phone": "+1 (555) 456-7890",
        "location": "Phoenix, AZ",
        "experience_years": 12,
        "license_types": ["CDL-A"],
        "twic_card": True,
        "hazmat_endorsement": False,
        "preferred_routes": ["OTR"],
        "equipment_experience": ["Flatbed", "Auto Transport"],
        "fit_score": 8.5,
        "profile_completion": 92,
        "bio": "Veteran driver specializing in specialized freight transport.",
    },
]

_PROFILE_FIELDS = ("name", "email", "phone", "location")


def seed_demo_data(db: Session) -> int:
    """Insert the demo drivers that are missing; returns how many were created."""
    created = 0
    for entry in DEMO_DRIVERS:
        if get_user_by_email(db, entry["email"]):
            continue
        profile = Profile(
            role=UserRole.DRIVER,
            # demo accounts are not meant to be logged into
            password_hash=hash_password(secrets.token_urlsafe(24)),
            **{k: entry[k] for k in _PROFILE_FIELDS},
        )
        db.add(profile)
        db.flush()
        db.add(
            Driver(
                id=profile.id,
                availability=Availability.AVAILABLE,
                documents_verified=True,
                **{k: v for k, v in entry.items() if k not in _PROFILE_FIELDS},
            )
        )
        created += 1
    db.flush()
    if created:
        logger.info("Seeded %d demo drivers", created)
    return created
