"""Tests for authentication service."""

from unittest.mock import patch

import pytest

from truckrecruit.auth.models import Profile, UserRole
from truckrecruit.auth.service import (
    SignupError,
    authenticate_user,
    ensure_admin_user,
    get_user_by_email,
    hash_password,
    is_strong_password,
    list_users,
    register_user,
    set_user_active,
    verify_password,
)
from truckrecruit.drivers.models import Driver
from truckrecruit.subscriptions.models import Subscription, SubscriptionStatus, SubscriptionType


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = hash_password("Haul4Freight")
        assert hashed != "Haul4Freight"
        assert verify_password("Haul4Freight", hashed)

    def test_wrong_password_fails(self):
        hashed = hash_password("Haul4Freight")
        assert not verify_password("haul4freight", hashed)

    def test_malformed_hash_fails(self):
        assert not verify_password("Haul4Freight", "not-a-bcrypt-hash")

    @pytest.mark.parametrize(
        ("candidate", "strong"),
        [
            ("Haul4Freight", True),
            ("short1A", False),
            ("alllowercase1", False),
            ("ALLUPPERCASE1", False),
            ("NoDigitsHere", False),
            ("A1" + "a" * 127, False),
        ],
    )
    def test_password_strength(self, candidate, strong):
        assert is_strong_password(candidate) is strong


class TestRegisterUser:
    def test_driver_gets_empty_driver_record(self, db_session):
        profile = register_user(
            db_session,
            email="  Mike@Drivers.Example.COM ",
            password="Haul4Freight",
            name="Michael Rodriguez",
            role=UserRole.DRIVER,
            location="Dallas, TX",
        )
        db_session.commit()

        assert profile.email == "mike@drivers.example.com"
        driver = db_session.get(Driver, profile.id)
        assert driver is not None
        assert driver.license_types == []
        assert db_session.query(Subscription).count() == 0

    def test_recruiter_starts_on_trial(self, db_session):
        profile = register_user(
            db_session,
            email="rita@carrier.example.com",
            password="Haul4Freight",
            name="Rita Recruiter",
            role="recruiter",
            company_name=" Lone Star Freight ",
        )
        db_session.commit()

        sub = db_session.query(Subscription).filter_by(recruiter_id=profile.id).one()
        assert sub.type == SubscriptionType.STARTER
        assert sub.status == SubscriptionStatus.TRIAL
        assert sub.contacts_limit == 5
        assert sub.contacts_used == 0
        assert profile.recruiter.company_name == "Lone Star Freight"

    def test_recruiter_requires_company(self, db_session):
        with pytest.raises(SignupError, match="Company name"):
            register_user(
                db_session, email="r@carrier.example.com", password="Haul4Freight", name="Rita", role=UserRole.RECRUITER
            )

    def test_duplicate_email_rejected(self, db_session, driver):
        with pytest.raises(SignupError, match="already exists"):
            register_user(
                db_session,
                email=driver.profile.email.upper(),
                password="Haul4Freight",
                name="Someone Else",
                role=UserRole.DRIVER,
            )

    def test_weak_password_rejected(self, db_session):
        with pytest.raises(SignupError, match="at least 8"):
            register_user(db_session, email="w@drivers.example.com", password="weak", name="Weak", role=UserRole.DRIVER)

    def test_admin_signup_refused(self, db_session):
        with pytest.raises(SignupError, match="Administrator"):
            register_user(db_session, email="a@example.com", password="Haul4Freight", name="Ada", role=UserRole.ADMIN)
        assert db_session.query(Profile).count() == 0


class TestAuthenticateUser:
    def test_valid_credentials(self, db_session, driver, password):
        user = authenticate_user(db_session, driver.profile.email, password)
        assert user is not None
        assert user.id == driver.id

    def test_wrong_password(self, db_session, driver):
        assert authenticate_user(db_session, driver.profile.email, "Wrong1234") is None

    def test_nonexistent_user(self, db_session, password):
        assert authenticate_user(db_session, "nobody@test.com", password) is None

    def test_deactivated_account_refused(self, db_session, make_driver, password):
        inactive = make_driver(is_active=False)
        assert authenticate_user(db_session, inactive.profile.email, password) is None

    def test_email_lookup_is_case_insensitive(self, db_session, admin):
        assert get_user_by_email(db_session, "ADMIN@truckrecruit.example.com").id == admin.id


class TestEnsureAdminUser:
    def test_creates_admin_once(self, db_session):
        with patch("truckrecruit.auth.service.settings") as mock_settings:
            mock_settings.admin_email = "Boss@TruckRecruit.example.com"
            mock_settings.admin_password = "Adm1nPassword"
            mock_settings.admin_name = "Boss"
            ensure_admin_user(db_session)
            ensure_admin_user(db_session)
        db_session.commit()

        admins = db_session.query(Profile).filter_by(role=UserRole.ADMIN).all()
        assert len(admins) == 1
        assert admins[0].email == "boss@truckrecruit.example.com"
        assert verify_password("Adm1nPassword", admins[0].password_hash)

    def test_skipped_without_credentials(self, db_session):
        with patch("truckrecruit.auth.service.settings") as mock_settings:
            mock_settings.admin_email = ""
            mock_settings.admin_password = ""
            ensure_admin_user(db_session)
        assert db_session.query(Profile).count() == 0


class TestUserAdministration:
    def test_list_users_filters_by_role_and_search(self, db_session, make_driver, recruiter, admin):
        make_driver(name="Michael Rodriguez")
        make_driver(name="Sarah Johnson")

        drivers, total = list_users(db_session, role=UserRole.DRIVER)
        assert total == 2
        assert {u.name for u in drivers} == {"Michael Rodriguez", "Sarah Johnson"}

        found, total = list_users(db_session, search="sarah")
        assert total == 1
        assert found[0].name == "Sarah Johnson"

    def test_list_users_paginates(self, db_session, make_driver):
        for i in range(5):
            make_driver(name=f"Driver {i}")
        page, total = list_users(db_session, limit=2, offset=2)
        assert total == 5
        assert len(page) == 2

    def test_set_user_active(self, db_session, driver, password):
        set_user_active(db_session, driver.profile, False)
        db_session.commit()
        assert authenticate_user(db_session, driver.profile.email, password) is None

        set_user_active(db_session, driver.profile, True)
        db_session.commit()
        assert authenticate_user(db_session, driver.profile.email, password) is not None
