import uuid
from sqlalchemy import Column, String, Integer, DateTime, JSON, Enum as SQLEnum, ForeignKey
from sqlalchemy.sql import func
from training_engine.core.database import Base
from training_engine.core.constants import AssignmentStatusEnum, DEFAULT_PRIORITY, PRIORITY_MAX_LENGTH

class TrainingAssignment(Base):
    """One user's obligation to complete one material or one course."""
    __tablename__ = "training_assignments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String(64), nullable=False, index=True)
    material_id = Column(String(36), ForeignKey("training_materials.id"), nullable=True, index=True)
    course_id = Column(String(36), ForeignKey("training_courses.id"), nullable=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    status = Column(
        SQLEnum(AssignmentStatusEnum, values_callable=lambda enum: [e.value for e in enum]),
        nullable=False,
        default=AssignmentStatusEnum.ASSIGNED,
        index=True
    )
    due_at = Column(DateTime(timezone=True), nullable=True, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    assigned_by = Column(String(64), nullable=True)
    priority = Column(String(PRIORITY_MAX_LENGTH), nullable=False, default=DEFAULT_PRIORITY)
    progress_percentage = Column(Integer, nullable=False, default=0)
    time_spent_minutes = Column(Integer, nullable=False, default=0)
    last_accessed_at = Column(DateTime(timezone=True), nullable=True)
    reminder_sent_at = Column(DateTime(timezone=True), nullable=True)
    metadata_ = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<TrainingAssignment(id={self.id}, user_id={self.user_id}, status={self.status})>"
