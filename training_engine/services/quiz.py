import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from training_engine.core.exceptions import NotFoundError, TrainingError, persistence_guard
from training_engine.crud.material import material as crud_material
from training_engine.crud.quiz_attempt import quiz_attempt as crud_quiz_attempt
from training_engine.crud.quiz_question import quiz_question as crud_quiz_question
from training_engine.models.quiz_attempt import QuizAttempt
from training_engine.models.quiz_question import QuizQuestion
from training_engine.schemas.quiz import QuizAttemptResult, QuizAttemptSubmit, QuizQuestionCreate, QuizQuestionUpdate
from training_engine.services.assignment import assignment_service
from training_engine.services.grading import grade, is_passing, percentage
from training_engine.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


class QuizService:

    def _get_material(self, db: Session, material_id: str, tenant_id: Optional[str] = None):
        material = crud_material.get(db, id=material_id)
        if not material or (tenant_id and material.tenant_id != tenant_id):
            raise NotFoundError(f"Material {material_id} not found.")
        return material

    def create_question(self, db: Session, material_id: str, question_in: QuizQuestionCreate, tenant_id: Optional[str] = None) -> QuizQuestion:
        self._get_material(db, material_id, tenant_id)
        question_data = question_in.model_dump()
        question_data["material_id"] = material_id
        with persistence_guard("Failed to create quiz question", db):
            return crud_quiz_question.create(db, obj_in=question_data)

    def get_question(self, db: Session, question_id: str) -> QuizQuestion:
        question = crud_quiz_question.get(db, id=question_id)
        if not question:
            raise NotFoundError(f"Quiz question {question_id} not found.")
        return question

    def list_questions(self, db: Session, material_id: str) -> List[QuizQuestion]:
        return crud_quiz_question.get_by_material(db, material_id=material_id)

    def update_question(self, db: Session, question_id: str, question_in: QuizQuestionUpdate) -> QuizQuestion:
        question = self.get_question(db, question_id)
        with persistence_guard("Failed to update quiz question", db):
            return crud_quiz_question.update(db, db_obj=question, obj_in=question_in)

    def delete_question(self, db: Session, question_id: str) -> None:
        question = self.get_question(db, question_id)
        with persistence_guard("Failed to delete quiz question", db):
            crud_quiz_question.delete(db, id=question.id)

    def submit_attempt(
        self,
        db: Session,
        attempt_in: QuizAttemptSubmit,
        submitted_by: str,
        tenant_id: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> QuizAttemptResult:
        """Grade a submission against the material's current question bank.

        The attempt row is committed before the linked assignment is looked up
        and re-evaluated. A missing assignment or a failure in that second step
        is logged and leaves the attempt in place.
        """
        now = now or utcnow()

        if tenant_id:
            material = self._get_material(db, attempt_in.material_id, tenant_id)
        else:
            material = crud_material.get(db, id=attempt_in.material_id)
        questions = crud_quiz_question.get_by_material(db, material_id=attempt_in.material_id)

        score, max_score = grade(questions, attempt_in.answers)
        percent = percentage(score, max_score)
        passed = is_passing(
            score,
            max_score,
            material.passing_score if material else None,
            material_loaded=material is not None
        )

        attempt_data = {
            "user_id": submitted_by,
            "material_id": attempt_in.material_id,
            "assignment_id": attempt_in.assignment_id,
            "score": score,
            "max_score": max_score if max_score > 0 else None,
            "passed": passed,
            "answers": attempt_in.answers,
            "time_spent_minutes": attempt_in.time_spent_minutes,
            "attempted_at": now,
        }
        with persistence_guard("Failed to save quiz attempt", db):
            attempt = crud_quiz_attempt.create(db, obj_in=attempt_data)

        logger.info(
            f"Quiz attempt {attempt.id} by user {submitted_by} on material {attempt_in.material_id}: "
            f"{score}/{max_score} ({percent}%), passed={passed}"
        )

        if attempt_in.assignment_id:
            try:
                assignment = assignment_service.get_assignment(db, attempt_in.assignment_id, tenant_id)
                total_time = (assignment.time_spent_minutes or 0) + (attempt_in.time_spent_minutes or 0)
                assignment_service.evaluate(
                    db,
                    assignment,
                    percent,
                    total_time,
                    now if passed else None,
                    now=now
                )
            except (TrainingError, SQLAlchemyError) as e:
                db.rollback()
                logger.warning(f"Quiz attempt {attempt.id} saved but assignment {attempt_in.assignment_id} was not updated: {e}")

        return QuizAttemptResult(
            id=attempt.id,
            user_id=attempt.user_id,
            material_id=attempt.material_id,
            assignment_id=attempt.assignment_id,
            score=attempt.score,
            max_score=attempt.max_score,
            passed=attempt.passed,
            answers=attempt.answers,
            time_spent_minutes=attempt.time_spent_minutes,
            attempted_at=attempt.attempted_at,
            percentage=percent
        )

    def get_attempt(self, db: Session, attempt_id: str, tenant_id: Optional[str] = None) -> QuizAttempt:
        attempt = crud_quiz_attempt.get_for_tenant(db, id=attempt_id, tenant_id=tenant_id)
        if not attempt:
            raise NotFoundError(f"Quiz attempt {attempt_id} not found.")
        return attempt

    def list_attempts(
        self,
        db: Session,
        assignment_id: Optional[str] = None,
        material_id: Optional[str] = None,
        user_id: Optional[str] = None,
        tenant_id: Optional[str] = None
    ) -> List[QuizAttempt]:
        return crud_quiz_attempt.get_filtered(
            db, assignment_id=assignment_id, material_id=material_id, user_id=user_id, tenant_id=tenant_id
        )


quiz_service = QuizService()
