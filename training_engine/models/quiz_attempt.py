import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, JSON
from training_engine.core.database import Base

class QuizAttempt(Base):
    """Graded quiz submission. Rows are never updated after insert."""
    __tablename__ = "training_quiz_attempts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False, index=True)
    material_id = Column(String(36), ForeignKey("training_materials.id"), nullable=False, index=True)
    assignment_id = Column(String(36), ForeignKey("training_assignments.id", ondelete="SET NULL"), nullable=True, index=True)
    score = Column(Integer, nullable=False, default=0)
    max_score = Column(Integer, nullable=True)
    passed = Column(Boolean, nullable=False, default=False)
    answers = Column(JSON, nullable=True)
    time_spent_minutes = Column(Integer, nullable=True)
    attempted_at = Column(DateTime(timezone=True), nullable=False)
