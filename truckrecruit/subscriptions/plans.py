"""Subscription plan catalogue.

Single source of truth for contact quotas and list prices per plan.
A ``contacts_limit`` of None means unlimited unlocks.
"""

from dataclasses import dataclass, field

from .models import SubscriptionType


@dataclass(frozen=True)
class Plan:
    type: SubscriptionType
    name: str
    contacts_limit: int | None
    price_monthly: float | None
    price_yearly: float | None
    features: tuple[str, ...] = field(default_factory=tuple)


PLANS: dict[SubscriptionType, Plan] = {
    SubscriptionType.STARTER: Plan(
        type=SubscriptionType.STARTER,
        name="Starter",
        contacts_limit=25,
        price_monthly=99.0,
        price_yearly=990.0,
        features=("Unlimited candidate search", "25 contact unlocks per month", "Basic analytics"),
    ),
    SubscriptionType.PRO: Plan(
        type=SubscriptionType.PRO,
        name="Pro",
        contacts_limit=100,
        price_monthly=199.0,
        price_yearly=1990.0,
        features=(
            "Unlimited candidate search",
            "100 contact unlocks per month",
            "Advanced analytics",
            "Interview scheduling",
        ),
    ),
    SubscriptionType.ENTERPRISE: Plan(
        type=SubscriptionType.ENTERPRISE,
        name="Enterprise",
        contacts_limit=None,
        price_monthly=399.0,
        price_yearly=3990.0,
        features=(
            "Unlimited candidate search",
            "Unlimited contact unlocks",
            "Advanced analytics",
            "Dedicated account manager",
        ),
    ),
    SubscriptionType.PAY_PER_CONTACT: Plan(
        type=SubscriptionType.PAY_PER_CONTACT,
        name="Pay per contact",
        contacts_limit=0,  # raised by purchased credits
        price_monthly=None,
        price_yearly=None,
        features=("Unlimited candidate search", "Pay only for the contacts you unlock"),
    ),
}


def get_plan(plan_type: SubscriptionType | str) -> Plan:
    return PLANS[SubscriptionType(plan_type)]


def list_plans() -> list[dict]:
    return [
        {
            "type": p.type.value,
            "name": p.name,
            "contacts_limit": p.contacts_limit,
            "unlimited": p.contacts_limit is None,
            "price_monthly": p.price_monthly,
            "price_yearly": p.price_yearly,
            "features": list(p.features),
        }
        for p in PLANS.values()
    ]
