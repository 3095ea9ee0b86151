import uuid
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from training_engine.core.database import Base

class QuizQuestion(Base):
    __tablename__ = "training_quiz_questions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    material_id = Column(String(36), ForeignKey("training_materials.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(String, nullable=False)
    options = Column(JSON, nullable=True)
    correct_index = Column(Integer, nullable=False, default=0) # Zero-based index of the correct option
    question_type = Column(String(30), nullable=False)
    points = Column(Integer, nullable=False, default=1)
    explanation = Column(String, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
