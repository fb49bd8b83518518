"""Driver JSON API routes: candidate search and driver profiles."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import Profile, UserRole
from ..database import get_db
from ..dependencies import get_analytics, get_current_user, require_role
from ..rate_limit import SEARCH_LIMIT, limiter
from .models import Availability
from .schemas import DriverUpdate
from .service import (
    DriverFilters,
    can_view_contact,
    driver_to_dict,
    get_driver,
    search_drivers,
    unlocked_driver_ids,
    update_driver,
)

router = APIRouter(tags=["drivers"])


@router.get("/drivers")
@limiter.limit(SEARCH_LIMIT)
def list_drivers(
    request: Request,
    search: str | None = Query(None, max_length=100),
    location: str | None = Query(None, max_length=100),
    experience_min: int | None = Query(None, ge=0, le=50),
    experience_max: int | None = Query(None, ge=0, le=50),
    license_types: list[str] | None = Query(None),
    availability: Availability | None = None,
    twic: bool | None = None,
    hazmat: bool | None = None,
    equipment: list[str] | None = Query(None),
    fit_score_min: float | None = Query(None, ge=0, le=10),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER, UserRole.ADMIN)),
    analytics=Depends(get_analytics),
):
    if experience_min is not None and experience_max is not None and experience_min > experience_max:
        return JSONResponse({"error": "experience_min must not exceed experience_max"}, status_code=400)

    filters = DriverFilters(
        search=search,
        location=location,
        experience_min=experience_min,
        experience_max=experience_max,
        license_types=license_types or [],
        availability=availability,
        twic=twic,
        hazmat=hazmat,
        equipment=equipment or [],
        fit_score_min=fit_score_min,
    )
    drivers, total = search_drivers(db, filters, limit=limit, offset=offset)
    unlocked = unlocked_driver_ids(db, user.id) if user.role == UserRole.RECRUITER else set()

    if analytics:
        analytics.track("candidate_search", user_id=user.id, data={"results": total, "search": search or ""})

    return JSONResponse(
        {
            "total": total,
            "limit": limit,
            "offset": offset,
            "drivers": [driver_to_dict(d, can_view_contact(user, d, unlocked)) for d in drivers],
        }
    )


@router.get("/drivers/me")
def my_driver_profile(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.DRIVER)),
):
    driver = get_driver(db, user.id)
    if not driver:
        return JSONResponse({"error": "Driver profile not found"}, status_code=404)
    return JSONResponse(driver_to_dict(driver, show_contact=True))


@router.put("/drivers/me")
def update_my_driver_profile(
    request: Request,
    payload: DriverUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.DRIVER)),
):
    driver = get_driver(db, user.id)
    if not driver:
        return JSONResponse({"error": "Driver profile not found"}, status_code=404)
    changes = payload.model_dump(exclude_unset=True)
    update_driver(db, driver, changes)
    audit(db, request, "driver_update", ",".join(sorted(changes)), user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "driver": driver_to_dict(driver, show_contact=True)})


@router.get("/drivers/{driver_id}")
def driver_detail(
    driver_id: str,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    driver = get_driver(db, driver_id)
    if not driver:
        return JSONResponse({"error": "Driver not found"}, status_code=404)
    if user.role == UserRole.DRIVER and user.id != driver.id:
        return JSONResponse({"error": "Forbidden"}, status_code=403)
    unlocked = unlocked_driver_ids(db, user.id) if user.role == UserRole.RECRUITER else set()
    return JSONResponse(driver_to_dict(driver, can_view_contact(user, driver, unlocked)))
