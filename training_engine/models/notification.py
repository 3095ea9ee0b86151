import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from training_engine.core.database import Base

class TrainingNotification(Base):
    __tablename__ = "training_notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String(64), nullable=False, index=True)
    assignment_id = Column(String(36), ForeignKey("training_assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    type = Column(String(30), nullable=False) # 'reminder', 'deadline', ...
    title = Column(String(255), nullable=False)
    message = Column(String, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    sent_at = Column(DateTime(timezone=True), nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)
