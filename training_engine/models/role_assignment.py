import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from training_engine.core.database import Base

class RoleTrainingAssignment(Base):
    """Role-level template consumed by an external provisioning process."""
    __tablename__ = "training_role_assignments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String(64), nullable=False, index=True)
    role_id = Column(String(64), nullable=False, index=True)
    material_id = Column(String(36), ForeignKey("training_materials.id"), nullable=True)
    course_id = Column(String(36), ForeignKey("training_courses.id"), nullable=True)
    is_required = Column(Boolean, nullable=False, default=False)
    due_days = Column(Integer, nullable=True)
    assigned_by = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
