import uuid
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from training_engine.core.database import Base

class Certificate(Base):
    __tablename__ = "training_certificates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String(64), nullable=False, index=True)
    assignment_id = Column(String(36), ForeignKey("training_assignments.id"), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    material_id = Column(String(36), nullable=True)
    course_id = Column(String(36), nullable=True)
    certificate_number = Column(String(32), nullable=False, unique=True, index=True)
    issued_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    is_valid = Column(Boolean, nullable=False, default=True)
    metadata_ = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
