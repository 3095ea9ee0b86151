from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Any, Dict
from datetime import datetime

from training_engine.core.constants import QuestionTypeEnum

class QuizQuestionBase(BaseModel):
    text: str = Field(..., min_length=1)
    options: Optional[Any] = None
    correct_index: int = Field(default=0, ge=0) # Zero-based index of the correct option
    question_type: QuestionTypeEnum = QuestionTypeEnum.SINGLE_CHOICE.value
    points: int = Field(default=1, ge=1)
    explanation: Optional[str] = None
    order_index: int = 0

    model_config = ConfigDict(use_enum_values=True)

class QuizQuestionCreate(QuizQuestionBase):
    pass

class QuizQuestionUpdate(BaseModel):
    text: Optional[str] = Field(default=None, min_length=1)
    options: Optional[Any] = None
    correct_index: Optional[int] = Field(default=None, ge=0)
    question_type: Optional[QuestionTypeEnum] = None
    points: Optional[int] = Field(default=None, ge=1)
    explanation: Optional[str] = None
    order_index: Optional[int] = None

    model_config = ConfigDict(use_enum_values=True)

class QuizQuestion(QuizQuestionBase):
    id: str
    material_id: str
    # Stored rows may predate input validation
    points: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class QuizAttemptSubmit(BaseModel):
    material_id: str = Field(..., min_length=1)
    assignment_id: Optional[str] = None
    answers: Dict[str, Any] = {}
    time_spent_minutes: Optional[int] = Field(default=None, ge=0)

class QuizAttempt(BaseModel):
    id: str
    user_id: str
    material_id: str
    assignment_id: Optional[str] = None
    score: int
    max_score: Optional[int] = None
    passed: bool
    answers: Optional[Dict[str, Any]] = None
    time_spent_minutes: Optional[int] = None
    attempted_at: datetime

    model_config = ConfigDict(from_attributes=True)

class QuizAttemptResult(QuizAttempt):
    percentage: int
