"""Tests for the driver directory service."""

from sqlalchemy import event

from truckrecruit.drivers.models import Availability
from truckrecruit.drivers.service import (
    DriverFilters,
    can_view_contact,
    compute_profile_completion,
    driver_to_dict,
    get_driver,
    search_drivers,
    unlocked_driver_ids,
    update_driver,
)
from truckrecruit.unlocks.service import unlock_contact
from truckrecruit.unlocks.store import SqlUnlockStore


def _names(drivers):
    return [d.profile.name for d in drivers]


class TestSearchDrivers:
    def test_orders_by_fit_score_then_experience(self, db_session, make_driver):
        make_driver(name="Low Fit", fit_score=5.0, experience_years=20)
        make_driver(name="Tie Junior", fit_score=9.0, experience_years=2)
        make_driver(name="Tie Senior", fit_score=9.0, experience_years=12)

        drivers, total = search_drivers(db_session, DriverFilters())
        assert total == 3
        assert _names(drivers) == ["Tie Senior", "Tie Junior", "Low Fit"]

    def test_excludes_deactivated_profiles(self, db_session, make_driver):
        make_driver(name="Visible")
        make_driver(name="Hidden", is_active=False)
        drivers, total = search_drivers(db_session, DriverFilters())
        assert _names(drivers) == ["Visible"]
        assert total == 1

    def test_text_search_matches_name_bio_and_location(self, db_session, make_driver):
        make_driver(name="Sarah Johnson", location="Phoenix, AZ")
        make_driver(name="James Wilson", bio="Reefer specialist, clean record")
        make_driver(name="Other Person", location="Dallas, TX")

        assert _names(search_drivers(db_session, DriverFilters(search="sarah"))[0]) == ["Sarah Johnson"]
        assert _names(search_drivers(db_session, DriverFilters(search="reefer"))[0]) == ["James Wilson"]
        assert _names(search_drivers(db_session, DriverFilters(location="phoenix"))[0]) == ["Sarah Johnson"]

    def test_experience_range(self, db_session, make_driver):
        make_driver(name="Rookie", experience_years=1)
        make_driver(name="Mid", experience_years=6)
        make_driver(name="Veteran", experience_years=15)

        drivers, _ = search_drivers(db_session, DriverFilters(experience_min=3, experience_max=10))
        assert _names(drivers) == ["Mid"]

    def test_endorsements_and_availability(self, db_session, make_driver):
        make_driver(name="Hazmat Twic", hazmat_endorsement=True, twic_card=True)
        make_driver(name="Hazmat Only", hazmat_endorsement=True, availability=Availability.EMPLOYED)
        make_driver(name="Plain")

        assert set(_names(search_drivers(db_session, DriverFilters(hazmat=True))[0])) == {"Hazmat Twic", "Hazmat Only"}
        assert _names(search_drivers(db_session, DriverFilters(hazmat=True, twic=True))[0]) == ["Hazmat Twic"]
        employed = search_drivers(db_session, DriverFilters(availability=Availability.EMPLOYED))[0]
        assert _names(employed) == ["Hazmat Only"]

    def test_license_and_equipment_overlap(self, db_session, make_driver):
        make_driver(name="Class A Reefer", license_types=["CDL-A"], equipment_experience=["Reefer", "Dry Van"])
        make_driver(name="Class B Flatbed", license_types=["CDL-B"], equipment_experience=["Flatbed"])

        by_license = search_drivers(db_session, DriverFilters(license_types=["cdl-b", "CDL-C"]))[0]
        assert _names(by_license) == ["Class B Flatbed"]
        by_equipment = search_drivers(db_session, DriverFilters(equipment=["reefer"]))[0]
        assert _names(by_equipment) == ["Class A Reefer"]

    def test_fit_score_minimum(self, db_session, make_driver):
        make_driver(name="Strong", fit_score=8.5)
        make_driver(name="Weak", fit_score=4.0)
        assert _names(search_drivers(db_session, DriverFilters(fit_score_min=8))[0]) == ["Strong"]

    def test_pagination_reports_full_total(self, db_session, make_driver):
        for i in range(5):
            make_driver(name=f"Driver {i}", fit_score=float(i))

        page, total = search_drivers(db_session, DriverFilters(), limit=2, offset=1)
        assert total == 5
        assert _names(page) == ["Driver 3", "Driver 2"]

    def test_page_size_is_capped(self, db_session, make_driver):
        make_driver()
        page, _ = search_drivers(db_session, DriverFilters(), limit=10_000, offset=-5)
        assert len(page) == 1

    def test_unfiltered_page_is_limited_in_sql(self, engine, db_session, make_driver):
        for i in range(4):
            make_driver(name=f"Driver {i}", fit_score=float(i))
        statements = []

        def capture(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement)

        event.listen(engine, "before_cursor_execute", capture)
        try:
            page, total = search_drivers(db_session, DriverFilters(), limit=2)
        finally:
            event.remove(engine, "before_cursor_execute", capture)

        assert total == 4
        assert _names(page) == ["Driver 3", "Driver 2"]
        assert any("LIMIT" in s.upper() and "FROM DRIVERS" in s.upper() for s in statements)

    def test_list_filter_page_reports_filtered_total(self, db_session, make_driver):
        for i in range(4):
            make_driver(name=f"Reefer {i}", fit_score=float(i), equipment_experience=["Reefer"])
        make_driver(name="Flatbed", fit_score=9.0, equipment_experience=["Flatbed"])

        page, total = search_drivers(db_session, DriverFilters(equipment=["reefer"]), limit=2, offset=1)
        assert total == 4
        assert _names(page) == ["Reefer 2", "Reefer 1"]


class TestContactVisibility:
    def test_recruiter_sees_contact_only_after_unlock(self, db_session, recruiter, driver):
        viewer = recruiter.profile
        assert not can_view_contact(viewer, driver, unlocked_driver_ids(db_session, recruiter.id))
        masked = driver_to_dict(driver, show_contact=False)
        assert masked["phone"] is None
        assert masked["email"] is None
        assert masked["contact_unlocked"] is False

        unlock_contact(SqlUnlockStore(db_session), recruiter.id, driver.id)

        ids = unlocked_driver_ids(db_session, recruiter.id)
        assert can_view_contact(viewer, driver, ids)
        shown = driver_to_dict(driver, show_contact=True)
        assert shown["email"] == driver.profile.email
        assert shown["phone"] == "+1 (555) 123-4567"

    def test_admin_and_self_always_see_contact(self, admin, driver):
        assert can_view_contact(admin, driver, set())
        assert can_view_contact(driver.profile, driver, set())

    def test_other_driver_never_sees_contact(self, make_driver, driver):
        other = make_driver(name="Other Driver")
        assert not can_view_contact(other.profile, driver, {driver.id})


class TestDriverProfile:
    def test_get_driver_rejects_bad_ids(self, db_session, driver):
        assert get_driver(db_session, "not-a-uuid") is None
        assert get_driver(db_session, str(driver.id)).id == driver.id

    def test_get_driver_skips_deactivated(self, db_session, make_driver):
        hidden = make_driver(is_active=False)
        assert get_driver(db_session, hidden.id) is None

    def test_completion_counts_checklist(self, make_driver):
        bare = make_driver(
            phone=None,
            location=None,
            experience_years=0,
            license_types=[],
            preferred_routes=[],
            equipment_experience=[],
        )
        assert compute_profile_completion(bare) == 0

    def test_update_refreshes_completion(self, db_session, driver):
        update_driver(db_session, driver, {"bio": "Fifteen years accident-free", "availability": "seeking"})
        db_session.commit()

        assert driver.availability == Availability.SEEKING
        assert driver.profile_completion == 88
