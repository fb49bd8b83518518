"""API v1 router: all JSON endpoints under /api/v1 prefix."""

from fastapi import APIRouter

from .applications.routes import router as applications_router
from .auth.admin_routes import router as admin_router
from .auth.routes import profile_router
from .dashboard.routes import router as dashboard_router
from .drivers.routes import router as drivers_router
from .interviews.routes import router as interviews_router
from .messages.routes import router as messages_router
from .recruiters.routes import router as recruiters_router
from .subscriptions.routes import router as subscriptions_router
from .unlocks.routes import router as unlocks_router

api_v1_router = APIRouter(prefix="/api/v1", tags=["api-v1"])

api_v1_router.include_router(profile_router)
api_v1_router.include_router(drivers_router)
api_v1_router.include_router(recruiters_router)
api_v1_router.include_router(subscriptions_router)
api_v1_router.include_router(unlocks_router)
api_v1_router.include_router(applications_router)
api_v1_router.include_router(interviews_router)
api_v1_router.include_router(messages_router)
api_v1_router.include_router(dashboard_router)
api_v1_router.include_router(admin_router)
