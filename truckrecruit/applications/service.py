"""Job postings and driver applications."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..auth.models import Profile, UserRole
from ..database import parse_uuid
from .models import Application, ApplicationStatus, JobPosting

logger = logging.getLogger(__name__)


class DuplicateApplication(Exception):
    """The driver already applied to this job."""


def create_job(db: Session, recruiter_id: UUID, **fields) -> JobPosting:
    job = JobPosting(recruiter_id=recruiter_id, **fields)
    db.add(job)
    db.flush()
    return job


def get_job(db: Session, job_id) -> JobPosting | None:
    uid = parse_uuid(job_id)
    if uid is None:
        return None
    return db.query(JobPosting).filter(JobPosting.id == uid).first()


def list_jobs(db: Session, user: Profile) -> list[JobPosting]:
    """Recruiters see their own postings; everyone else sees active ones."""
    query = db.query(JobPosting)
    if user.role == UserRole.RECRUITER:
        query = query.filter(JobPosting.recruiter_id == user.id)
    elif user.role == UserRole.DRIVER:
        query = query.filter(JobPosting.active.is_(True))
    return query.order_by(JobPosting.created_at.desc()).all()


def apply_to_job(db: Session, driver_id: UUID, job: JobPosting, cover_letter: str | None = None) -> Application:
    application = Application(
        driver_id=driver_id,
        job_id=job.id,
        recruiter_id=job.recruiter_id,
        status=ApplicationStatus.PENDING,
        cover_letter=cover_letter,
    )
    db.add(application)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateApplication(f"Already applied to job {job.id}") from exc
    logger.info("Driver %s applied to job %s", driver_id, job.id)
    return application


def list_applications(db: Session, user: Profile, status: ApplicationStatus | None = None) -> list[Application]:
    query = db.query(Application).options(joinedload(Application.job))
    if user.role == UserRole.DRIVER:
        query = query.filter(Application.driver_id == user.id)
    elif user.role == UserRole.RECRUITER:
        query = query.filter(Application.recruiter_id == user.id)
    if status:
        query = query.filter(Application.status == status)
    return query.order_by(Application.applied_at.desc()).all()


def get_application(db: Session, application_id) -> Application | None:
    uid = parse_uuid(application_id)
    if uid is None:
        return None
    return db.query(Application).filter(Application.id == uid).first()


def update_application_status(
    db: Session,
    application: Application,
    status: ApplicationStatus,
    notes: str | None = None,
) -> Application:
    application.status = ApplicationStatus(status)
    if notes is not None:
        application.notes = notes
    db.flush()
    return application


def job_to_dict(job: JobPosting) -> dict:
    return {
        "id": str(job.id),
        "recruiter_id": str(job.recruiter_id),
        "title": job.title,
        "description": job.description,
        "location": job.location,
        "job_type": job.job_type,
        "salary_min": job.salary_min,
        "salary_max": job.salary_max,
        "requirements": list(job.requirements or []),
        "benefits": list(job.benefits or []),
        "active": bool(job.active),
        "created_at": job.created_at.isoformat() if job.created_at else None,
    }


def application_to_dict(application: Application) -> dict:
    job = application.job
    return {
        "id": str(application.id),
        "driver_id": str(application.driver_id),
        "job_id": str(application.job_id),
        "recruiter_id": str(application.recruiter_id),
        "job_title": job.title if job else None,
        "status": application.status.value,
        "cover_letter": application.cover_letter,
        "notes": application.notes,
        "applied_at": application.applied_at.isoformat() if application.applied_at else None,
        "updated_at": application.updated_at.isoformat() if application.updated_at else None,
    }
