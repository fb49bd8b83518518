"""Recruiter company profile routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import Profile, UserRole
from ..database import get_db
from ..dependencies import require_role
from .schemas import RecruiterUpdate
from .service import get_recruiter, recruiter_to_dict, update_recruiter

router = APIRouter(tags=["recruiters"])


@router.get("/recruiters/me")
def my_company(
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
):
    recruiter = get_recruiter(db, user.id)
    if not recruiter:
        return JSONResponse({"error": "Recruiter profile not found"}, status_code=404)
    return JSONResponse(recruiter_to_dict(recruiter))


@router.put("/recruiters/me")
def update_my_company(
    request: Request,
    payload: RecruiterUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
):
    recruiter = get_recruiter(db, user.id)
    if not recruiter:
        return JSONResponse({"error": "Recruiter profile not found"}, status_code=404)
    changes = payload.changes()
    update_recruiter(db, recruiter, changes)
    audit(db, request, "recruiter_update", ",".join(sorted(changes)), user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "recruiter": recruiter_to_dict(recruiter)})
