from datetime import datetime
from sqlalchemy.orm import Session
from typing import List, Optional

from fastapi import HTTPException, status

from training_engine.core.exceptions import NotFoundError, persistence_guard
from training_engine.crud.notification import notification as crud_notification
from training_engine.models.notification import TrainingNotification
from training_engine.schemas.notification import NotificationCreate
from training_engine.services.assignment import assignment_service
from training_engine.utils.timeutils import utcnow

class NotificationService:
    def create_notification(
        self, db: Session, *, tenant_id: str, notification_in: NotificationCreate, now: Optional[datetime] = None
    ) -> TrainingNotification:
        assignment = assignment_service.get_assignment(db, notification_in.assignment_id, tenant_id)
        notification_data = {
            "tenant_id": tenant_id,
            "assignment_id": assignment.id,
            "user_id": notification_in.user_id or assignment.user_id,
            "type": notification_in.type,
            "title": notification_in.title,
            "message": notification_in.message,
            "is_read": False,
            "sent_at": now or utcnow(),
        }
        with persistence_guard("Failed to create notification", db):
            n = crud_notification.create(db, obj_in=notification_data)
        return n

    def get_user_notifications(self, db: Session, *, user_id: str, tenant_id: Optional[str] = None, unread_only: bool = False, skip: int = 0, limit: int = 100) -> List[TrainingNotification]:
        result = crud_notification.get_for_user(db, user_id=user_id, tenant_id=tenant_id, unread_only=unread_only, skip=skip, limit=limit)
        return result

    def mark_notification_as_read(self, db: Session, *, notification_id: str, user_id: str, tenant_id: Optional[str] = None, now: Optional[datetime] = None) -> TrainingNotification:
        n = crud_notification.get(db, id=notification_id)
        if not n or (tenant_id and n.tenant_id != tenant_id):
            raise NotFoundError(f"Notification {notification_id} not found.")
        if n.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only mark your own notifications as read."
            )
        with persistence_guard("Failed to mark notification as read", db):
            n = crud_notification.mark_as_read(db, notification=n, read_at=now or utcnow())
        return n

notification_service = NotificationService()
