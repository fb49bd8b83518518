"""Authentication service: sign-up, password hashing, credential checks."""

import logging
import re
from datetime import UTC, datetime, timedelta

import bcrypt
from sqlalchemy.orm import Session

from ..config import settings
from ..drivers.models import Driver
from ..recruiters.models import Recruiter
from ..subscriptions.models import Subscription, SubscriptionStatus, SubscriptionType
from .models import Profile, UserRole

logger = logging.getLogger(__name__)

_PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


class SignupError(ValueError):
    """Sign-up rejected (duplicate email, missing company, ...)."""


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # malformed hash in the database
        return False


def is_strong_password(password: str) -> bool:
    """At least 8 chars with a lowercase letter, an uppercase letter and a digit."""
    return 8 <= len(password) <= 128 and bool(_PASSWORD_RE.match(password))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> Profile | None:
    return db.query(Profile).filter(Profile.email == normalize_email(email)).first()


def authenticate_user(db: Session, email: str, password: str) -> Profile | None:
    """Verify credentials and return the profile, or None if invalid or deactivated."""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        return None
    if not user.is_active:
        logger.info("Login refused for deactivated account %s", user.id)
        return None
    return user


def create_trial_subscription(db: Session, recruiter_id) -> Subscription:
    now = datetime.now(UTC)
    sub = Subscription(
        recruiter_id=recruiter_id,
        type=SubscriptionType.STARTER,
        status=SubscriptionStatus.TRIAL,
        contacts_limit=settings.trial_contacts_limit,
        contacts_used=0,
        price_monthly=0.0,
        current_period_start=now,
        current_period_end=now + timedelta(days=settings.trial_days),
    )
    db.add(sub)
    return sub


def register_user(
    db: Session,
    *,
    email: str,
    password: str,
    name: str,
    role: UserRole,
    company_name: str | None = None,
    phone: str | None = None,
    location: str | None = None,
) -> Profile:
    """Create a profile plus its role record; recruiters start on a trial subscription.

    Raises SignupError for a taken email, a weak password, an admin role or a
    recruiter without a company name. Flushes, the caller commits.
    """
    role = UserRole(role)
    if role == UserRole.ADMIN:
        raise SignupError("Administrator accounts cannot be created through sign-up")
    if not is_strong_password(password):
        raise SignupError(
            "Password must be at least 8 characters and contain a lowercase letter, "
            "an uppercase letter and a number"
        )
    if get_user_by_email(db, email):
        raise SignupError("An account with this email already exists")
    if role == UserRole.RECRUITER and not (company_name or "").strip():
        raise SignupError("Company name is required for recruiters")

    profile = Profile(
        email=normalize_email(email),
        name=name.strip(),
        role=role,
        phone=phone,
        location=location,
        password_hash=hash_password(password),
    )
    db.add(profile)
    db.flush()

    if role == UserRole.DRIVER:
        db.add(Driver(id=profile.id, license_types=[], preferred_routes=[], equipment_experience=[]))
    else:
        db.add(Recruiter(id=profile.id, company_name=company_name.strip()))
        db.flush()
        create_trial_subscription(db, profile.id)

    db.flush()
    logger.info("Registered %s account %s", role.value, profile.id)
    return profile


def ensure_admin_user(db: Session) -> None:
    """Create admin profile from env vars if it doesn't exist yet."""
    if not settings.admin_email or not settings.admin_password:
        return

    if get_user_by_email(db, settings.admin_email):
        return

    admin = Profile(
        email=normalize_email(settings.admin_email),
        name=settings.admin_name,
        role=UserRole.ADMIN,
        password_hash=hash_password(settings.admin_password),
    )
    db.add(admin)
    db.flush()
    logger.info("Bootstrap admin account created for %s", admin.email)


def list_users(
    db: Session,
    role: UserRole | None = None,
    search: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[Profile], int]:
    query = db.query(Profile)
    if role:
        query = query.filter(Profile.role == role)
    if search:
        term = f"%{search.strip()}%"
        query = query.filter((Profile.name.ilike(term)) | (Profile.email.ilike(term)))
    total = query.count()
    users = query.order_by(Profile.created_at.desc()).offset(offset).limit(limit).all()
    return users, total


def set_user_active(db: Session, user: Profile, active: bool) -> Profile:
    """Deactivate or reactivate an account; profiles are never hard-deleted."""
    user.is_active = active
    db.flush()
    logger.info("Profile %s %s", user.id, "activated" if active else "deactivated")
    return user
