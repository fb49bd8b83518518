"""Direct messages between profiles."""

from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..auth.models import Profile
from ..database import parse_uuid
from .models import Message


def get_recipient(db: Session, recipient_id) -> Profile | None:
    uid = parse_uuid(recipient_id)
    if uid is None:
        return None
    return db.query(Profile).filter(Profile.id == uid, Profile.is_active.is_(True)).first()


def send_message(
    db: Session,
    sender_id: UUID,
    recipient_id: UUID,
    content: str,
    application_id: UUID | None = None,
) -> Message:
    message = Message(
        sender_id=sender_id,
        recipient_id=recipient_id,
        content=content.strip(),
        application_id=application_id,
        read=False,
    )
    db.add(message)
    db.flush()
    return message


def list_messages(db: Session, user_id: UUID, with_user: UUID | None = None, limit: int = 100) -> list[Message]:
    """Messages sent or received by ``user_id``, newest first; optionally one conversation only."""
    query = db.query(Message).filter(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
    if with_user:
        query = query.filter(or_(Message.sender_id == with_user, Message.recipient_id == with_user))
    return query.order_by(Message.created_at.desc()).limit(limit).all()


def get_message(db: Session, message_id) -> Message | None:
    uid = parse_uuid(message_id)
    if uid is None:
        return None
    return db.query(Message).filter(Message.id == uid).first()


def mark_read(db: Session, message: Message) -> Message:
    message.read = True
    db.flush()
    return message


def unread_count(db: Session, user_id: UUID) -> int:
    return db.query(Message).filter(Message.recipient_id == user_id, Message.read.is_(False)).count()


def active_conversations(db: Session, user_id: UUID) -> int:
    """Number of distinct profiles the user has exchanged messages with."""
    rows = (
        db.query(Message.sender_id, Message.recipient_id)
        .filter(or_(Message.sender_id == user_id, Message.recipient_id == user_id))
        .all()
    )
    return len({s if r == user_id else r for s, r in rows})


def message_to_dict(message: Message) -> dict:
    return {
        "id": str(message.id),
        "sender_id": str(message.sender_id),
        "recipient_id": str(message.recipient_id),
        "application_id": str(message.application_id) if message.application_id else None,
        "content": message.content,
        "read": bool(message.read),
        "created_at": message.created_at.isoformat() if message.created_at else None,
    }
