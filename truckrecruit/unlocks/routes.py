"""Contact unlock routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import Profile, UserRole
from ..database import get_db, parse_uuid
from ..dependencies import get_analytics, get_unlock_store, require_role
from ..rate_limit import UNLOCK_LIMIT, limiter
from .results import UnlockStatus
from .service import get_unlocked_contact, list_unlocked_drivers, unlock_contact
from .store import UnlockStore

router = APIRouter(tags=["unlocks"])

HTTP_STATUS = {
    UnlockStatus.UNLOCKED: 200,
    UnlockStatus.ALREADY_UNLOCKED: 200,
    UnlockStatus.QUOTA_EXCEEDED: 402,
    UnlockStatus.SUBSCRIPTION_INACTIVE: 402,
    UnlockStatus.NO_SUBSCRIPTION: 402,
    UnlockStatus.DRIVER_NOT_FOUND: 404,
    UnlockStatus.NOT_AUTHENTICATED: 401,
    UnlockStatus.TRANSIENT_FAILURE: 503,
    UnlockStatus.INVARIANT_VIOLATION: 500,
}

RETRY_AFTER_SECONDS = 5


@router.post("/unlocks/{driver_id}")
@limiter.limit(UNLOCK_LIMIT)
def unlock(
    request: Request,
    driver_id: str,
    db: Session = Depends(get_db),
    store: UnlockStore = Depends(get_unlock_store),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
    analytics=Depends(get_analytics),
):
    uid = parse_uuid(driver_id)
    if uid is None:
        return JSONResponse({"error": "Driver not found", "status": UnlockStatus.DRIVER_NOT_FOUND.value}, 404)

    result = unlock_contact(store, user.id, uid)
    body = result.to_dict()
    headers = {}
    if result.status == UnlockStatus.TRANSIENT_FAILURE:
        headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
    elif not result.ok:
        body["error"] = result.message

    if result.status == UnlockStatus.UNLOCKED:
        audit(db, request, "contact_unlock", f"driver_id={uid}", user_id=user.id)
        db.commit()
        if analytics:
            analytics.track("contact_unlock", user_id=user.id, data={"driver_id": str(uid)})

    return JSONResponse(body, status_code=HTTP_STATUS[result.status], headers=headers)


@router.get("/unlocks")
def unlocked_contacts(
    store: UnlockStore = Depends(get_unlock_store),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
):
    contacts = list_unlocked_drivers(store, user.id)
    return JSONResponse({"contacts": [c.to_dict() for c in contacts], "total": len(contacts)})


@router.get("/unlocks/{driver_id}")
def unlocked_contact(
    driver_id: str,
    store: UnlockStore = Depends(get_unlock_store),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
):
    uid = parse_uuid(driver_id)
    contact = get_unlocked_contact(store, user.id, uid) if uid else None
    if contact is None:
        return JSONResponse({"unlocked": False, "contact": None})
    return JSONResponse({"unlocked": True, "contact": contact.to_dict()})
