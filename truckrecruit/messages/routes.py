"""Messaging routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..applications.service import get_application
from ..audit.service import audit
from ..auth.models import Profile
from ..database import get_db
from ..dependencies import get_analytics, get_current_user
from .service import (
    get_message,
    get_recipient,
    list_messages,
    mark_read,
    message_to_dict,
    send_message,
    unread_count,
)

router = APIRouter(tags=["messages"])


class MessagePayload(BaseModel):
    recipient_id: str
    content: str = Field(..., min_length=1, max_length=2000)
    application_id: str | None = None


@router.get("/messages")
def messages(
    with_user: str | None = None,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    counterpart = get_recipient(db, with_user) if with_user else None
    if with_user and counterpart is None:
        return JSONResponse({"error": "User not found"}, status_code=404)
    rows = list_messages(db, user.id, counterpart.id if counterpart else None)
    return JSONResponse({"messages": [message_to_dict(m) for m in rows], "unread": unread_count(db, user.id)})


@router.post("/messages")
def post_message(
    request: Request,
    payload: MessagePayload,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
    analytics=Depends(get_analytics),
):
    if not payload.content.strip():
        return JSONResponse({"error": "Message cannot be empty"}, status_code=400)
    recipient = get_recipient(db, payload.recipient_id)
    if not recipient:
        return JSONResponse({"error": "Recipient not found"}, status_code=404)
    if recipient.id == user.id:
        return JSONResponse({"error": "Cannot send a message to yourself"}, status_code=400)

    application_id = None
    if payload.application_id:
        application = get_application(db, payload.application_id)
        if not application or user.id not in (application.driver_id, application.recruiter_id):
            return JSONResponse({"error": "Application not found"}, status_code=404)
        application_id = application.id

    message = send_message(db, user.id, recipient.id, payload.content, application_id)
    audit(db, request, "message_send", f"to={recipient.id}", user_id=user.id)
    db.commit()
    if analytics:
        analytics.track("message_sent", user_id=user.id, data={"recipient_id": str(recipient.id)})
    return JSONResponse({"ok": True, "message": message_to_dict(message)}, status_code=201)


@router.post("/messages/{message_id}/read")
def read_message(
    message_id: str,
    db: Session = Depends(get_db),
    user: Profile = Depends(get_current_user),
):
    message = get_message(db, message_id)
    if not message or message.recipient_id != user.id:
        return JSONResponse({"error": "Message not found"}, status_code=404)
    mark_read(db, message)
    db.commit()
    return JSONResponse({"ok": True})
