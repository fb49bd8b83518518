"""Tests for demo data seeding and role navigation."""

from truckrecruit.api_v1 import api_v1_router
from truckrecruit.auth.models import UserRole
from truckrecruit.drivers.models import Driver
from truckrecruit.drivers.service import DriverFilters, search_drivers
from truckrecruit.navigation import navigation_for
from truckrecruit.seed import DEMO_DRIVERS, seed_demo_data


class TestSeedDemoData:
    def test_seeds_once(self, db_session):
        assert seed_demo_data(db_session) == len(DEMO_DRIVERS)
        db_session.commit()
        assert seed_demo_data(db_session) == 0
        assert db_session.query(Driver).count() == len(DEMO_DRIVERS)

    def test_seeded_drivers_are_searchable(self, db_session):
        seed_demo_data(db_session)
        db_session.commit()
        drivers, total = search_drivers(db_session, DriverFilters(hazmat=True))
        assert total >= 1
        assert all(d.hazmat_endorsement for d in drivers)


class TestNavigation:
    def test_each_role_has_a_dashboard(self):
        for role in UserRole:
            assert navigation_for(role)[0]["href"] == "/dashboard"

    def test_only_recruiters_see_subscription(self):
        names = {role: {item["name"] for item in navigation_for(role)} for role in UserRole}
        assert "Subscription" in names[UserRole.RECRUITER]
        assert "Subscription" not in names[UserRole.DRIVER]
        assert "Users" in names[UserRole.ADMIN]

    def test_every_entry_is_backed_by_an_endpoint(self):
        get_paths = {r.path for r in api_v1_router.routes if "GET" in getattr(r, "methods", set())}
        for role in UserRole:
            for item in navigation_for(role):
                assert f"/api/v1{item['endpoint']}" in get_paths, (role, item)
