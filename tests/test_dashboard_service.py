"""Tests for role dashboards and recruiter analytics."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from truckrecruit.applications.models import ApplicationStatus
from truckrecruit.applications.service import apply_to_job, create_job, update_application_status
from truckrecruit.dashboard.service import (
    ADMIN_DASHBOARD_CACHE_KEY,
    get_admin_dashboard,
    get_driver_dashboard,
    get_recruiter_analytics,
    get_recruiter_dashboard,
)
from truckrecruit.interviews.models import InterviewType
from truckrecruit.interviews.service import create_interview
from truckrecruit.messages.service import send_message
from truckrecruit.unlocks.service import unlock_contact
from truckrecruit.unlocks.store import SqlUnlockStore


def _job(db, recruiter_id):
    job = create_job(
        db,
        recruiter_id,
        title="Regional Reefer Driver",
        description="Regional reefer runs in the Southwest, home every weekend, paid weekly with direct deposit.",
        location="Phoenix, AZ",
        job_type="full-time",
        requirements=["CDL-A"],
    )
    db.commit()
    return job


class TestRecruiterDashboard:
    def test_counts(self, db_session, make_recruiter, make_driver):
        recruiter = make_recruiter(contacts_limit=10, contacts_used=0)
        a = make_driver(name="Driver A", fit_score=8.0)
        make_driver(name="Driver B", fit_score=6.0)
        make_driver(name="Gone", fit_score=1.0, is_active=False)

        unlock_contact(SqlUnlockStore(db_session), recruiter.id, a.id)
        send_message(db_session, recruiter.id, a.id, "Hi")
        create_interview(
            db_session,
            recruiter.id,
            a.id,
            title="Phone screen",
            scheduled_at=datetime.now(UTC),
            type=InterviewType.PHONE,
        )
        db_session.commit()

        data = get_recruiter_dashboard(db_session, recruiter.profile)
        assert data["total_candidates"] == 2
        assert data["avg_fit_score"] == 7.0
        assert data["active_conversations"] == 1
        assert data["interviews_this_week"] == 1
        assert data["contacts_unlocked"] == 1
        assert data["subscription"]["contacts_used"] == 1
        assert data["subscription"]["usage_percentage"] == 10

    def test_without_subscription(self, db_session, make_recruiter):
        recruiter = make_recruiter(with_subscription=False)
        data = get_recruiter_dashboard(db_session, recruiter.profile)
        assert data["subscription"] is None
        assert data["avg_fit_score"] == 0


class TestDriverDashboard:
    def test_applications_and_interviews(self, db_session, recruiter, driver):
        application = apply_to_job(db_session, driver.id, _job(db_session, recruiter.id))
        update_application_status(db_session, application, ApplicationStatus.INTERVIEWED)
        create_interview(
            db_session,
            recruiter.id,
            driver.id,
            title="Road test",
            scheduled_at=datetime.now(UTC) + timedelta(days=2),
            type="in-person",
        )
        send_message(db_session, recruiter.id, driver.id, "See you Thursday")
        db_session.commit()

        data = get_driver_dashboard(db_session, driver.profile)
        assert data["applications"]["total"] == 1
        assert data["applications"]["by_status"]["interviewed"] == 1
        assert data["applications"]["by_status"]["pending"] == 0
        assert data["profile_completion"] == 80
        assert data["unread_messages"] == 1
        assert [i["title"] for i in data["upcoming_interviews"]] == ["Road test"]


class TestAdminDashboard:
    def test_computes_and_caches(self, db_session, recruiter, driver, admin):
        cache = MagicMock()
        cache.get_json.return_value = None

        data = get_admin_dashboard(db_session, cache)

        assert data["total_users"] == 3
        assert data["users_by_role"] == {"driver": 1, "recruiter": 1, "admin": 1}
        assert data["subscriptions_by_status"]["active"] == 1
        cache.set_json.assert_called_once()
        key, payload, _ttl = cache.set_json.call_args.args
        assert key == ADMIN_DASHBOARD_CACHE_KEY
        assert payload == data

    def test_cache_hit_skips_database(self):
        cache = MagicMock()
        cache.get_json.return_value = {"total_users": 99}
        db = MagicMock()

        assert get_admin_dashboard(db, cache) == {"total_users": 99}
        db.query.assert_not_called()

    def test_null_cache_always_computes(self, db_session, null_cache, driver):
        assert get_admin_dashboard(db_session, null_cache)["users_by_role"]["driver"] == 1


class TestRecruiterAnalytics:
    def test_distributions_and_pipeline(self, db_session, recruiter, make_driver):
        tx = make_driver(name="Texan", location="Austin, TX", experience_years=1, license_types=["CDL-A", "CDL-B"])
        make_driver(name="Also Texan", location="Dallas, TX", experience_years=12)
        make_driver(name="Arizonan", location="Phoenix, AZ", experience_years=4)

        job = _job(db_session, recruiter.id)
        hired = apply_to_job(db_session, tx.id, job)
        update_application_status(db_session, hired, ApplicationStatus.HIRED)
        db_session.commit()

        data = get_recruiter_analytics(db_session, recruiter.profile)
        assert data["total_candidates"] == 3
        assert data["by_region"][0] == {"label": "TX", "count": 2, "percentage": 67}
        assert {r["label"]: r["count"] for r in data["by_license_type"]} == {"CDL-A": 3, "CDL-B": 1}
        buckets = {r["label"] for r in data["by_experience"]}
        assert buckets == {"0-2 years", "3-5 years", "10+ years"}
        assert data["pipeline"]["hired"] == 1
        assert data["hire_rate"] == 100
        assert data["contacts_unlocked"] == 0
