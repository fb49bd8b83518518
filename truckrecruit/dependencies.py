"""Shared FastAPI dependencies."""

from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .analytics.service import AnalyticsQueue
from .auth.models import Profile, UserRole
from .database import get_db
from .integrations.cache import CacheService
from .unlocks.store import SqlUnlockStore, UnlockStore


class AuthRequired(Exception):
    """Raised when user is not authenticated. Handled by exception handler in main.py."""

    pass


class Forbidden(Exception):
    """Raised when the user's role may not use a route. Handled in main.py."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(detail)
        self.detail = detail


def get_cache(request: Request) -> CacheService:
    """Get the cache service from app state."""
    return request.app.state.cache


def get_analytics(request: Request) -> AnalyticsQueue | None:
    return getattr(request.app.state, "analytics", None)


def get_unlock_store(db: Session = Depends(get_db)) -> UnlockStore:
    return SqlUnlockStore(db)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> Profile:
    """Get the authenticated profile from session, or raise AuthRequired."""
    user_id_str = request.session.get("user_id")
    if not user_id_str:
        raise AuthRequired()
    try:
        user_id = UUID(user_id_str)
    except (ValueError, AttributeError):
        request.session.clear()
        raise AuthRequired()
    user = db.query(Profile).filter(Profile.id == user_id).first()
    if not user or not user.is_active:
        request.session.clear()
        raise AuthRequired()
    return user


def require_role(*roles: UserRole):
    """Dependency factory: the current user, provided their role is one of ``roles``."""

    def _checker(user: Profile = Depends(get_current_user)) -> Profile:
        if user.role not in roles:
            raise Forbidden(f"This page is only available to: {', '.join(r.value for r in roles)}")
        return user

    return _checker
