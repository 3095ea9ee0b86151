from datetime import datetime
from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.crud.base import CRUDBase
from training_engine.models.notification import TrainingNotification
from training_engine.schemas.notification import NotificationCreate

class CRUDNotification(CRUDBase[TrainingNotification, NotificationCreate, NotificationCreate]):
    """CRUD operations for training notifications."""

    def get_for_user(self, db: Session, *, user_id: str, tenant_id: Optional[str] = None, unread_only: bool = False, skip: int = 0, limit: int = 100) -> List[TrainingNotification]:
        query = db.query(self.model).filter(self.model.user_id == user_id)
        if tenant_id:
            query = query.filter(self.model.tenant_id == tenant_id)
        if unread_only:
            query = query.filter(self.model.is_read == False)
        return query.order_by(self.model.sent_at.desc()).offset(skip).limit(limit).all()

    def get_for_assignment(self, db: Session, *, assignment_id: str) -> List[TrainingNotification]:
        return db.query(self.model).filter(self.model.assignment_id == assignment_id).all()

    def mark_as_read(self, db: Session, *, notification: TrainingNotification, read_at: datetime) -> Optional[TrainingNotification]:
        if not notification.is_read:
            notification.is_read = True
            notification.read_at = read_at
            db.add(notification)
            db.commit()
            db.refresh(notification)
        return notification

notification = CRUDNotification(TrainingNotification)
