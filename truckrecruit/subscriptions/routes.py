"""Subscription routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import Profile, UserRole
from ..database import get_db
from ..dependencies import get_current_user, require_role
from .plans import list_plans
from .service import get_subscription, subscription_summary

router = APIRouter(tags=["subscriptions"])


@router.get("/subscription")
def my_subscription(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
):
    sub = get_subscription(db, user.id)
    if not sub:
        return JSONResponse({"error": "No subscription found", "plans": list_plans()}, status_code=404)
    return JSONResponse(subscription_summary(sub))


@router.get("/subscription/plans")
def plans(user: Profile = Depends(get_current_user)):
    return JSONResponse({"plans": list_plans()})
