from sqlalchemy.orm import Query, Session
from typing import List, Optional

from training_engine.crud.base import CRUDBase
from training_engine.models.material import Material
from training_engine.models.quiz_attempt import QuizAttempt
from training_engine.schemas.quiz import QuizAttemptSubmit

class CRUDQuizAttempt(CRUDBase[QuizAttempt, QuizAttemptSubmit, QuizAttemptSubmit]):

    def _scoped(self, db: Session, tenant_id: Optional[str]) -> Query:
        # Attempts carry no tenant column; they belong to their material's tenant.
        query = db.query(QuizAttempt)
        if tenant_id:
            query = query.join(Material, Material.id == QuizAttempt.material_id).filter(Material.tenant_id == tenant_id)
        return query

    def get_for_tenant(self, db: Session, *, id: str, tenant_id: Optional[str] = None) -> Optional[QuizAttempt]:
        return self._scoped(db, tenant_id).filter(QuizAttempt.id == id).first()

    def get_filtered(
        self,
        db: Session,
        *,
        assignment_id: Optional[str] = None,
        material_id: Optional[str] = None,
        user_id: Optional[str] = None,
        tenant_id: Optional[str] = None
    ) -> List[QuizAttempt]:
        query = self._scoped(db, tenant_id)
        if assignment_id:
            query = query.filter(QuizAttempt.assignment_id == assignment_id)
        if material_id:
            query = query.filter(QuizAttempt.material_id == material_id)
        if user_id:
            query = query.filter(QuizAttempt.user_id == user_id)
        return query.order_by(QuizAttempt.attempted_at.desc()).all()


quiz_attempt = CRUDQuizAttempt(QuizAttempt)
