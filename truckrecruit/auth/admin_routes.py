"""Administrator user management routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..database import get_db
from ..dependencies import require_role
from .models import Profile, UserRole
from .schemas import profile_to_dict
from .service import list_users, set_user_active

router = APIRouter(prefix="/admin", tags=["admin"])


class ActivePayload(BaseModel):
    active: bool


@router.get("/users")
def users(
    role: UserRole | None = None,
    search: str | None = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_role(UserRole.ADMIN)),
):
    rows, total = list_users(db, role=role, search=search, limit=limit, offset=offset)
    return JSONResponse({"total": total, "users": [profile_to_dict(u) for u in rows]})


@router.put("/users/{user_id}/active")
def toggle_active(
    request: Request,
    user_id: str,
    payload: ActivePayload,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_role(UserRole.ADMIN)),
):
    try:
        uid = UUID(user_id)
    except ValueError:
        return JSONResponse({"error": "User not found"}, status_code=404)
    user = db.query(Profile).filter(Profile.id == uid).first()
    if not user:
        return JSONResponse({"error": "User not found"}, status_code=404)
    if user.id == admin.id and not payload.active:
        return JSONResponse({"error": "You cannot deactivate your own account"}, status_code=400)

    set_user_active(db, user, payload.active)
    audit(db, request, "user_active", f"id={user.id} active={payload.active}", user_id=admin.id)
    db.commit()
    return JSONResponse({"ok": True, "user": profile_to_dict(user)})
