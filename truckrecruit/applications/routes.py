"""Job posting and application routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..audit.service import audit
from ..auth.models import Profile, UserRole
from ..database import get_db
from ..dependencies import get_analytics, get_current_user, require_role
from .models import ApplicationStatus
from .schemas import ApplicationCreate, ApplicationStatusUpdate, JobCreate
from .service import (
    DuplicateApplication,
    application_to_dict,
    apply_to_job,
    create_job,
    get_application,
    get_job,
    job_to_dict,
    list_applications,
    list_jobs,
    update_application_status,
)

router = APIRouter(tags=["applications"])


@router.get("/jobs")
def jobs(
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    return JSONResponse({"jobs": [job_to_dict(j) for j in list_jobs(db, user)]})


@router.post("/jobs")
def post_job(
    request: Request,
    payload: JobCreate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER)),
):
    job = create_job(db, user.id, **payload.model_dump())
    audit(db, request, "job_create", f"id={job.id}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "job": job_to_dict(job)}, status_code=201)


@router.get("/applications")
def applications(
    status: ApplicationStatus | None = None,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    rows = list_applications(db, user, status)
    return JSONResponse({"applications": [application_to_dict(a) for a in rows]})


@router.post("/applications")
def apply(
    request: Request,
    payload: ApplicationCreate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.DRIVER)),
    analytics=Depends(get_analytics),
):
    job = get_job(db, payload.job_id)
    if not job or not job.active:
        return JSONResponse({"error": "Job not found"}, status_code=404)
    try:
        application = apply_to_job(db, user.id, job, payload.cover_letter)
    except DuplicateApplication:
        return JSONResponse({"error": "You have already applied to this job"}, status_code=409)
    audit(db, request, "application_create", f"job_id={job.id}", user_id=user.id)
    db.commit()
    if analytics:
        analytics.track("application_submitted", user_id=user.id, data={"job_id": str(job.id)})
    return JSONResponse({"ok": True, "application": application_to_dict(application)}, status_code=201)


@router.put("/applications/{application_id}/status")
def set_application_status(
    request: Request,
    application_id: str,
    payload: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    user: Profile = Depends(require_role(UserRole.RECRUITER, UserRole.ADMIN)),
):
    application = get_application(db, application_id)
    if not application:
        return JSONResponse({"error": "Application not found"}, status_code=404)
    if user.role == UserRole.RECRUITER and application.recruiter_id != user.id:
        return JSONResponse({"error": "Application not found"}, status_code=404)

    update_application_status(db, application, payload.status, payload.notes)
    audit(db, request, "application_status", f"id={application.id} status={payload.status.value}", user_id=user.id)
    db.commit()
    return JSONResponse({"ok": True, "application": application_to_dict(application)})
