"""Dashboard and analytics routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..auth.models import Profile, UserRole
from ..database import get_db
from ..dependencies import get_cache, get_current_user, require_role
from ..integrations.cache import CacheService
from .service import get_admin_dashboard, get_driver_dashboard, get_recruiter_analytics, get_recruiter_dashboard

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard")
def dashboard(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache),
    user: Profile = Depends(get_current_user),
):
    if user.role == UserRole.RECRUITER:
        data = get_recruiter_dashboard(db, user)
    elif user.role == UserRole.DRIVER:
        data = get_driver_dashboard(db, user)
    else:
        data = get_admin_dashboard(db, cache)
    return JSONResponse({"role": user.role.value, **data})


@router.get("/analytics/recruiter")
def recruiter_analytics(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
):
    return JSONResponse(get_recruiter_analytics(db, user))


@router.get("/admin/dashboard")
def admin_dashboard(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache),
    user: Profile = Depends(require_role(UserRole.ADMIN)),
):
    return JSONResponse(get_admin_dashboard(db, cache))
