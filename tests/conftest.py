"""Shared test fixtures."""

import uuid

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from truckrecruit import models  # noqa: F401  (registers every table on Base.metadata)
from truckrecruit.auth.models import Profile, UserRole
from truckrecruit.auth.service import hash_password
from truckrecruit.database.base import Base
from truckrecruit.drivers.models import Availability, Driver
from truckrecruit.integrations.cache import NullCacheService
from truckrecruit.recruiters.models import Recruiter
from truckrecruit.subscriptions.models import Subscription, SubscriptionStatus, SubscriptionType

TEST_PASSWORD = "Sup3rSecret"
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of a test (StaticPool = one connection)."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def file_session_factory(tmp_path):
    """File-backed SQLite with a real connection pool, one connection per session."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'truckrecruit.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine)
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _make_driver(db, name="Michael Rodriguez", email=None, **driver_fields) -> Driver:
    profile = Profile(
        id=uuid.uuid4(),
        email=email or f"{uuid.uuid4().hex[:8]}@drivers.example.com",
        name=name,
        role=UserRole.DRIVER,
        phone=driver_fields.pop("phone", "+1 (555) 123-4567"),
        location=driver_fields.pop("location", "Dallas, TX"),
        password_hash=TEST_PASSWORD_HASH,
        is_active=driver_fields.pop("is_active", True),
    )
    db.add(profile)
    db.flush()
    defaults = {
        "experience_years": 5,
        "license_types": ["CDL-A"],
        "preferred_routes": ["OTR"],
        "equipment_experience": ["Dry Van"],
        "availability": Availability.AVAILABLE,
        "fit_score": 7.5,
        "profile_completion": 80,
    }
    defaults.update(driver_fields)
    driver = Driver(id=profile.id, **defaults)
    db.add(driver)
    db.commit()
    return driver


def _make_recruiter(
    db,
    contacts_limit: int | None = 25,
    contacts_used: int = 0,
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
    with_subscription: bool = True,
    email=None,
) -> Recruiter:
    profile = Profile(
        id=uuid.uuid4(),
        email=email or f"{uuid.uuid4().hex[:8]}@carrier.example.com",
        name="Rita Recruiter",
        role=UserRole.RECRUITER,
        password_hash=TEST_PASSWORD_HASH,
    )
    db.add(profile)
    db.flush()
    recruiter = Recruiter(id=profile.id, company_name="Lone Star Freight")
    db.add(recruiter)
    db.flush()
    if with_subscription:
        db.add(
            Subscription(
                recruiter_id=recruiter.id,
                type=SubscriptionType.STARTER if contacts_limit is not None else SubscriptionType.ENTERPRISE,
                status=status,
                contacts_limit=contacts_limit,
                contacts_used=contacts_used,
                price_monthly=99.0,
            )
        )
    db.commit()
    return recruiter


def _make_admin(db, email="admin@truckrecruit.example.com") -> Profile:
    admin = Profile(
        id=uuid.uuid4(),
        email=email,
        name="Ada Admin",
        role=UserRole.ADMIN,
        password_hash=TEST_PASSWORD_HASH,
    )
    db.add(admin)
    db.commit()
    return admin


@pytest.fixture
def driver(db_session):
    return _make_driver(db_session)


@pytest.fixture
def recruiter(db_session):
    return _make_recruiter(db_session)


@pytest.fixture
def admin(db_session):
    return _make_admin(db_session)


@pytest.fixture
def null_cache():
    """No-op cache for testing."""
    return NullCacheService()


@pytest.fixture
def make_driver(db_session):
    """Factory: make_driver(name=..., fit_score=..., license_types=[...], db=other_session, ...)."""
    return lambda db=None, **kwargs: _make_driver(db if db is not None else db_session, **kwargs)


@pytest.fixture
def make_recruiter(db_session):
    """Factory: make_recruiter(contacts_limit=..., contacts_used=..., status=...)."""
    return lambda db=None, **kwargs: _make_recruiter(db if db is not None else db_session, **kwargs)


@pytest.fixture
def password():
    """Plain-text password of every fixture account."""
    return TEST_PASSWORD
