"""Subscription reads and usage summary for the recruiter billing page."""

from uuid import UUID

from sqlalchemy.orm import Session

from ..dashboard.stats import percentage
from .models import CONSUMING_STATUSES, Subscription, SubscriptionType
from .plans import PLANS


def get_subscription(db: Session, recruiter_id: UUID) -> Subscription | None:
    return db.query(Subscription).filter(Subscription.recruiter_id == recruiter_id).first()


def subscription_summary(sub: Subscription) -> dict:
    """Plan, status and usage; ``usage_percentage`` is 0 for unlimited plans."""
    limit = sub.contacts_limit
    used = sub.contacts_used or 0
    plan = PLANS.get(SubscriptionType(sub.type))
    return {
        "id": str(sub.id),
        "type": sub.type.value,
        "plan_name": plan.name if plan else sub.type.value,
        "status": sub.status.value,
        "active": sub.status in CONSUMING_STATUSES,
        "contacts_limit": limit,
        "contacts_used": used,
        "contacts_remaining": None if limit is None else max(limit - used, 0),
        "unlimited": limit is None,
        "usage_percentage": percentage(used, limit),
        "price_monthly": sub.price_monthly,
        "current_period_start": sub.current_period_start.isoformat() if sub.current_period_start else None,
        "current_period_end": sub.current_period_end.isoformat() if sub.current_period_end else None,
    }
