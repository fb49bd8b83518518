"""Authentication routes (session cookie) and the caller's own profile."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..database import get_db
from ..dependencies import get_analytics, get_current_user
from ..navigation import navigation_for
from ..rate_limit import LOGIN_LIMIT, limiter
from .models import Profile
from .schemas import LoginRequest, ProfileUpdate, SignupRequest, profile_to_dict
from .service import SignupError, authenticate_user, register_user

router = APIRouter(prefix="/auth", tags=["auth"])
profile_router = APIRouter(tags=["profile"])


@router.post("/signup")
def signup(
    request: Request,
    payload: SignupRequest,
    db: Session = Depends(get_db),
    analytics=Depends(get_analytics),
):
    try:
        profile = register_user(
            db,
            email=payload.email,
            password=payload.password,
            name=payload.name,
            role=payload.role,
            company_name=payload.company_name,
            phone=payload.phone,
            location=payload.location,
        )
    except SignupError as exc:
        db.rollback()
        return JSONResponse({"error": str(exc)}, status_code=400)
    audit(db, request, "signup", f"role={profile.role.value}", user_id=profile.id)
    db.commit()
    request.session["user_id"] = str(profile.id)
    if analytics:
        analytics.track("signup", user_id=profile.id, data={"role": profile.role.value})
    return JSONResponse({"ok": True, "user": profile_to_dict(profile)}, status_code=201)


@router.post("/login")
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    payload: LoginRequest,
    db: Session = Depends(get_db),
    analytics=Depends(get_analytics),
):
    user = authenticate_user(db, payload.email, payload.password)
    if not user:
        audit(db, request, "login_failed", f"email={payload.email}")
        db.commit()
        return JSONResponse({"error": "Invalid credentials"}, status_code=401)
    request.session["user_id"] = str(user.id)
    audit(db, request, "login", f"email={payload.email}", user_id=user.id)
    db.commit()
    if analytics:
        analytics.track("login", user_id=user.id, data={"role": user.role.value})
    return JSONResponse({"ok": True, "user": profile_to_dict(user)})


@router.post("/logout")
def logout(request: Request, db: Session = Depends(get_db)):
    if request.session.get("user_id"):
        audit(db, request, "logout")
        db.commit()
    request.session.clear()
    return JSONResponse({"ok": True})


@router.get("/me")
def me(user: Profile = Depends(get_current_user)):
    return JSONResponse({"user": profile_to_dict(user), "navigation": navigation_for(user.role)})


@profile_router.get("/navigation")
def navigation(user: Profile = Depends(get_current_user)):
    return JSONResponse({"role": user.role.value, "items": navigation_for(user.role)})


@profile_router.get("/profile")
def get_profile(user: Profile = Depends(get_current_user)):
    return JSONResponse(profile_to_dict(user))


@profile_router.put("/profile")
def update_profile(
    request: Request,
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(user, field, value.strip() if isinstance(value, str) else value)
    audit(db, request, "profile_update", ",".join(sorted(changes)), user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "user": profile_to_dict(user)})
