from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from training_engine.schemas.response import APIResponse
from training_engine.schemas.notification import Notification, NotificationCreate
from training_engine.services.notification import notification_service
from training_engine.services.reminder import reminder_service
from training_engine.utils import deps

router = APIRouter()

@router.post("/", response_model=APIResponse[Notification], status_code=201)
async def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    notification = notification_service.create_notification(db, tenant_id=context.tenant_id, notification_in=notification_in)
    return APIResponse(message="Notification created successfully", data=notification)

@router.get("/", response_model=APIResponse[List[Notification]])
async def get_my_notifications(
    unread_only: bool = False,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    """Retrieve notifications for the current user."""
    data = notification_service.get_user_notifications(
        db, user_id=context.user_id, tenant_id=context.tenant_id, unread_only=unread_only, skip=skip, limit=limit
    )
    return APIResponse(message="Notifications fetched successfully", data=data)

@router.post("/reminders", response_model=APIResponse[List[Notification]])
async def send_reminders(
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    """Run a reminder sweep for the caller's tenant now."""
    sent = reminder_service.send_reminders(db, context.tenant_id)
    return APIResponse(message=f"{len(sent)} reminder(s) sent", data=sent)

@router.post("/{notification_id}/read", response_model=APIResponse[Notification])
async def mark_notification_as_read(
    notification_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    """Mark a specific notification as read."""
    notification = notification_service.mark_notification_as_read(
        db, notification_id=notification_id, user_id=context.user_id, tenant_id=context.tenant_id
    )
    return APIResponse(message="Notification marked as read", data=notification)
