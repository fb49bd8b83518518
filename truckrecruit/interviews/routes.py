"""Interview JSON API routes."""

from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, HttpUrl
from sqlalchemy.orm import Session

from ..applications.service import get_application
from ..audit.service import audit
from ..auth.models import Profile, UserRole
from ..database import get_db
from ..dependencies import get_current_user, require_role
from ..drivers.service import get_driver
from .models import InterviewStatus, InterviewType
from .service import (
    as_utc,
    create_interview,
    get_interview,
    get_upcoming_interviews,
    interview_to_dict,
    list_interviews,
    update_interview_status,
)

router = APIRouter(tags=["interviews"])


class InterviewPayload(BaseModel):
    driver_id: str
    application_id: str | None = None
    title: str = Field(..., min_length=5, max_length=100)
    description: str | None = Field(None, max_length=1000)
    scheduled_at: datetime
    duration_minutes: int = Field(30, ge=15, le=240)
    type: InterviewType
    meeting_url: HttpUrl | None = None
    notes: str | None = Field(None, max_length=1000)


class InterviewStatusPayload(BaseModel):
    status: InterviewStatus
    notes: str | None = Field(None, max_length=1000)


@router.get("/interviews")
def interviews(
    status: InterviewStatus | None = None,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    return JSONResponse({"interviews": [interview_to_dict(i) for i in list_interviews(db, user, status)]})


@router.post("/interviews")
def schedule_interview(
    request: Request,
    payload: InterviewPayload,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
):
    driver = get_driver(db, payload.driver_id)
    if not driver:
        return JSONResponse({"error": "Driver not found"}, status_code=404)

    # 24h buffer for client clock and timezone skew
    scheduled = as_utc(payload.scheduled_at)
    if scheduled < datetime.now(UTC) - timedelta(hours=24):
        return JSONResponse({"error": "Interviews cannot be scheduled in the past"}, status_code=400)

    application_id = None
    if payload.application_id:
        application = get_application(db, payload.application_id)
        if not application or application.recruiter_id != user.id or application.driver_id != driver.id:
            return JSONResponse({"error": "Application not found"}, status_code=404)
        application_id = application.id

    interview = create_interview(
        db,
        user.id,
        driver.id,
        title=payload.title,
        description=payload.description,
        scheduled_at=scheduled,
        duration_minutes=payload.duration_minutes,
        type=payload.type,
        application_id=application_id,
        meeting_url=str(payload.meeting_url) if payload.meeting_url else None,
        notes=payload.notes,
    )
    audit(db, request, "interview_create", f"id={interview.id} driver_id={driver.id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "interview": interview_to_dict(interview)}, status_code=201)


@router.put("/interviews/{interview_id}/status")
def set_interview_status(
    request: Request,
    interview_id: str,
    payload: InterviewStatusPayload,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER, UserRole.ADMIN)),
):
    interview = get_interview(db, interview_id)
    if not interview or (user.role == UserRole.RECRUITER and interview.recruiter_id != user.id):
        return JSONResponse({"error": "Interview not found"}, status_code=404)

    update_interview_status(db, interview, payload.status, payload.notes)
    audit(db, request, "interview_status", f"id={interview.id} status={payload.status.value}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "interview": interview_to_dict(interview)})


@router.get("/interviews-upcoming")
def upcoming_interviews(
    hours: int = Query(48, ge=1, le=24 * 14),
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    return JSONResponse({"interviews": [interview_to_dict(i) for i in get_upcoming_interviews(db, user, hours)]})
