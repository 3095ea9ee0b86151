import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from training_engine.core.database import Base

class Material(Base):
    __tablename__ = "training_materials"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String(64), nullable=False, index=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(String, nullable=True)
    uri = Column(String, nullable=False)
    type = Column(String(20), nullable=False)
    material_type = Column(String(30), nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    tags = Column(JSON, nullable=True)
    is_required = Column(Boolean, nullable=False, default=False)
    passing_score = Column(Integer, nullable=True) # Percentage threshold for quizzes
    attempts_limit = Column(Integer, nullable=True)
    metadata_ = Column("metadata", JSON, nullable=True)
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
