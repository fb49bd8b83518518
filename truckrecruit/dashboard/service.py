"""Role dashboards and recruiter analytics."""

from datetime import UTC, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..applications.models import Application, ApplicationStatus
from ..auth.models import Profile, UserRole
from ..config import settings
from ..drivers.models import Driver
from ..integrations.cache import CacheService
from ..interviews.service import count_interviews_between, get_upcoming_interviews, interview_to_dict
from ..messages.service import active_conversations, unread_count
from ..subscriptions.models import Subscription, SubscriptionStatus
from ..subscriptions.service import get_subscription
from ..unlocks.models import ContactUnlock
from .stats import average, distribution, experience_bucket, percentage, region_of

ADMIN_DASHBOARD_CACHE_KEY = "dashboard:admin"


def _active_drivers(db: Session) -> list[Driver]:
    return db.query(Driver).join(Profile, Profile.id == Driver.id).filter(Profile.is_active.is_(True)).all()


def _week_bounds(now: datetime) -> tuple[datetime, datetime]:
    start = (now - timedelta(days=now.weekday())).replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=7)


def get_recruiter_dashboard(db: Session, recruiter: Profile) -> dict:
    drivers = _active_drivers(db)
    week_start, week_end = _week_bounds(datetime.now(UTC))
    sub = get_subscription(db, recruiter.id)
    unlocked = db.query(func.count(ContactUnlock.id)).filter(ContactUnlock.recruiter_id == recruiter.id).scalar()

    usage = None
    if sub:
        usage = {
            "type": sub.type.value,
            "status": sub.status.value,
            "contacts_used": sub.contacts_used or 0,
            "contacts_limit": sub.contacts_limit,
            "unlimited": sub.contacts_limit is None,
            "usage_percentage": percentage(sub.contacts_used or 0, sub.contacts_limit),
        }

    return {
        "total_candidates": len(drivers),
        "active_conversations": active_conversations(db, recruiter.id),
        "interviews_this_week": count_interviews_between(db, recruiter, week_start, week_end),
        "avg_fit_score": round(average(d.fit_score or 0 for d in drivers), 1),
        "contacts_unlocked": unlocked or 0,
        "subscription": usage,
    }


def get_driver_dashboard(db: Session, driver_profile: Profile) -> dict:
    rows = (
        db.query(Application.status, func.count(Application.id))
        .filter(Application.driver_id == driver_profile.id)
        .group_by(Application.status)
        .all()
    )
    by_status = {s.value: 0 for s in ApplicationStatus}
    for status, count in rows:
        by_status[ApplicationStatus(status).value] = count

    driver = db.query(Driver).filter(Driver.id == driver_profile.id).first()
    return {
        "applications": {"total": sum(by_status.values()), "by_status": by_status},
        "profile_completion": driver.profile_completion if driver else 0,
        "fit_score": float(driver.fit_score or 0) if driver else 0.0,
        "unread_messages": unread_count(db, driver_profile.id),
        "upcoming_interviews": [
            interview_to_dict(i) for i in get_upcoming_interviews(db, driver_profile, hours=24 * 7)
        ],
    }


def _compute_admin_dashboard(db: Session) -> dict:
    role_rows = db.query(Profile.role, func.count(Profile.id)).group_by(Profile.role).all()
    users_by_role = {r.value: 0 for r in UserRole}
    for role, count in role_rows:
        users_by_role[UserRole(role).value] = count

    sub_rows = db.query(Subscription.status, func.count(Subscription.id)).group_by(Subscription.status).all()
    subs_by_status = {s.value: 0 for s in SubscriptionStatus}
    for status, count in sub_rows:
        subs_by_status[SubscriptionStatus(status).value] = count

    fit_scores = [row[0] or 0 for row in db.query(Driver.fit_score).all()]
    return {
        "total_users": sum(users_by_role.values()),
        "active_users": db.query(func.count(Profile.id)).filter(Profile.is_active.is_(True)).scalar() or 0,
        "users_by_role": users_by_role,
        "subscriptions_by_status": subs_by_status,
        "total_unlocks": db.query(func.count(ContactUnlock.id)).scalar() or 0,
        "total_applications": db.query(func.count(Application.id)).scalar() or 0,
        "avg_fit_score": round(average(fit_scores), 1),
        "generated_at": datetime.now(UTC).isoformat(),
    }


def get_admin_dashboard(db: Session, cache: CacheService) -> dict:
    """Platform totals, served from cache for ``dashboard_cache_ttl`` seconds."""
    cached = cache.get_json(ADMIN_DASHBOARD_CACHE_KEY)
    if cached is not None:
        return cached
    data = _compute_admin_dashboard(db)
    cache.set_json(ADMIN_DASHBOARD_CACHE_KEY, data, settings.dashboard_cache_ttl)
    return data


def get_recruiter_analytics(db: Session, recruiter: Profile) -> dict:
    """Candidate pool distributions plus the recruiter's own pipeline numbers."""
    drivers = _active_drivers(db)
    licenses = [lt for d in drivers for lt in (d.license_types or [])]

    app_rows = (
        db.query(Application.status, func.count(Application.id))
        .filter(Application.recruiter_id == recruiter.id)
        .group_by(Application.status)
        .all()
    )
    pipeline = {s.value: 0 for s in ApplicationStatus}
    for status, count in app_rows:
        pipeline[ApplicationStatus(status).value] = count
    total_apps = sum(pipeline.values())

    return {
        "total_candidates": len(drivers),
        "avg_fit_score": round(average(d.fit_score or 0 for d in drivers), 1),
        "by_region": distribution(drivers, lambda d: region_of(d.profile.location)),
        "by_license_type": distribution(licenses, lambda lt: lt),
        "by_experience": distribution(drivers, lambda d: experience_bucket(d.experience_years)),
        "pipeline": pipeline,
        "hire_rate": percentage(pipeline[ApplicationStatus.HIRED.value], total_apps),
        "contacts_unlocked": db.query(func.count(ContactUnlock.id))
        .filter(ContactUnlock.recruiter_id == recruiter.id)
        .scalar()
        or 0,
    }
