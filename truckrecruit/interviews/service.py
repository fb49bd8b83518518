"""Interview scheduling service."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy.orm import Session

from ..auth.models import Profile, UserRole
from ..database import parse_uuid
from .models import Interview, InterviewStatus, InterviewType


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def create_interview(
    db: Session,
    recruiter_id: UUID,
    driver_id: UUID,
    *,
    title: str,
    scheduled_at: datetime,
    type: InterviewType,
    duration_minutes: int = 30,
    application_id: UUID | None = None,
    description: str | None = None,
    meeting_url: str | None = None,
    notes: str | None = None,
) -> Interview:
    interview = Interview(
        recruiter_id=recruiter_id,
        driver_id=driver_id,
        application_id=application_id,
        title=title,
        description=description,
        scheduled_at=as_utc(scheduled_at),
        duration_minutes=duration_minutes,
        type=InterviewType(type),
        status=InterviewStatus.SCHEDULED,
        meeting_url=meeting_url,
        notes=notes,
    )
    db.add(interview)
    db.flush()
    return interview


def get_interview(db: Session, interview_id) -> Interview | None:
    uid = parse_uuid(interview_id)
    if uid is None:
        return None
    return db.query(Interview).filter(Interview.id == uid).first()


def _scoped(db: Session, user: Profile):
    query = db.query(Interview)
    if user.role == UserRole.RECRUITER:
        query = query.filter(Interview.recruiter_id == user.id)
    elif user.role == UserRole.DRIVER:
        query = query.filter(Interview.driver_id == user.id)
    return query


def list_interviews(db: Session, user: Profile, status: InterviewStatus | None = None) -> list[Interview]:
    query = _scoped(db, user)
    if status:
        query = query.filter(Interview.status == status)
    return query.order_by(Interview.scheduled_at.asc()).all()


def update_interview_status(
    db: Session,
    interview: Interview,
    status: InterviewStatus,
    notes: str | None = None,
) -> Interview:
    interview.status = InterviewStatus(status)
    if notes is not None:
        interview.notes = notes
    db.flush()
    return interview


def get_upcoming_interviews(db: Session, user: Profile, hours: int = 48) -> list[Interview]:
    """Scheduled interviews starting within the next N hours."""
    now = datetime.now(UTC)
    return (
        _scoped(db, user)
        .filter(
            Interview.status == InterviewStatus.SCHEDULED,
            Interview.scheduled_at > now,
            Interview.scheduled_at <= now + timedelta(hours=hours),
        )
        .order_by(Interview.scheduled_at.asc())
        .all()
    )


def count_interviews_between(db: Session, user: Profile, start: datetime, end: datetime) -> int:
    return (
        _scoped(db, user)
        .filter(
            Interview.status != InterviewStatus.CANCELLED,
            Interview.scheduled_at >= start,
            Interview.scheduled_at < end,
        )
        .count()
    )


def interview_to_dict(interview: Interview) -> dict:
    return {
        "id": str(interview.id),
        "recruiter_id": str(interview.recruiter_id),
        "driver_id": str(interview.driver_id),
        "application_id": str(interview.application_id) if interview.application_id else None,
        "title": interview.title,
        "description": interview.description,
        "scheduled_at": interview.scheduled_at.isoformat(),
        "duration_minutes": interview.duration_minutes,
        "type": interview.type.value,
        "status": interview.status.value,
        "meeting_url": interview.meeting_url,
        "notes": interview.notes,
    }
