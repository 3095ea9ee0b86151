from typing import List
from sqlalchemy.orm import Session

from training_engine.crud.base import CRUDBase
from training_engine.models.quiz_question import QuizQuestion
from training_engine.schemas.quiz import QuizQuestionCreate, QuizQuestionUpdate

class CRUDQuizQuestion(CRUDBase[QuizQuestion, QuizQuestionCreate, QuizQuestionUpdate]):
    def get_by_material(self, db: Session, *, material_id: str) -> List[QuizQuestion]:
        return (
            db.query(self.model)
            .filter(self.model.material_id == material_id)
            .order_by(self.model.order_index)
            .all()
        )

quiz_question = CRUDQuizQuestion(QuizQuestion)
