import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from training_engine.core.constants import AssignmentStatusEnum, REMINDER_WINDOW_DAYS
from training_engine.core.exceptions import NotFoundError, TrainingValidationError, persistence_guard
from training_engine.crud.assignment import assignment as crud_assignment
from training_engine.crud.course import course as crud_course
from training_engine.crud.material import material as crud_material
from training_engine.crud.progress import progress as crud_progress
from training_engine.models.assignment import TrainingAssignment
from training_engine.models.progress import TrainingProgress
from training_engine.models.role_assignment import RoleTrainingAssignment
from training_engine.schemas.assignment import (
    AssignCourseRequest,
    AssignMaterialRequest,
    AssignmentFilter,
    AssignmentUpdate,
    AssignToRoleRequest,
)
from training_engine.schemas.progress import BulkProgressUpdate, ProgressUpdate
from training_engine.services.lifecycle import (
    apply_status_edit,
    clamp_progress,
    evaluate_state,
    initial_status,
    normalize_priority,
)
from training_engine.utils.timeutils import ensure_utc, utcnow

logger = logging.getLogger(__name__)


class AssignmentService:

    def _require_users(self, user_ids: List[str]) -> List[str]:
        user_ids = [user_id for user_id in (user_ids or []) if user_id]
        if not user_ids:
            raise TrainingValidationError("At least one user_id is required.")
        return user_ids

    def _fan_out(
        self,
        db: Session,
        *,
        tenant_id: str,
        user_ids: List[str],
        due_at: Optional[datetime],
        priority: Optional[str],
        metadata: Optional[dict],
        assigned_by: Optional[str],
        now: datetime,
        material_id: Optional[str] = None,
        course_id: Optional[str] = None
    ) -> List[TrainingAssignment]:
        due_at = ensure_utc(due_at)
        created = []
        with persistence_guard("Failed to create assignment", db):
            for user_id in user_ids:
                assignment_in = {
                    "tenant_id": tenant_id,
                    "material_id": material_id,
                    "course_id": course_id,
                    "user_id": user_id,
                    "status": initial_status(due_at, now),
                    "due_at": due_at,
                    "assigned_by": assigned_by,
                    "priority": normalize_priority(priority),
                    "progress_percentage": 0,
                    "time_spent_minutes": 0,
                    "metadata_": dict(metadata) if metadata else None,
                }
                created.append(crud_assignment.create(db, obj_in=assignment_in, commit=False))
            db.commit()

        for assignment in created:
            logger.info(f"Assignment {assignment.id} created for user {assignment.user_id} with status {assignment.status.value}")
        return created

    def get_assignment(self, db: Session, assignment_id: str, tenant_id: Optional[str] = None) -> TrainingAssignment:
        assignment = crud_assignment.get(db, id=assignment_id)
        if not assignment or (tenant_id and assignment.tenant_id != tenant_id):
            raise NotFoundError(f"Assignment {assignment_id} not found.")
        return assignment

    def assign_material(
        self, db: Session, tenant_id: str, request: AssignMaterialRequest, assigned_by: Optional[str] = None, now: Optional[datetime] = None
    ) -> List[TrainingAssignment]:
        if not request.material_id:
            raise TrainingValidationError("material_id is required.")
        user_ids = self._require_users(request.user_ids)

        material = crud_material.get(db, id=request.material_id)
        if not material or material.tenant_id != tenant_id:
            raise NotFoundError(f"Material {request.material_id} not found.")

        return self._fan_out(
            db,
            tenant_id=tenant_id,
            user_ids=user_ids,
            due_at=request.due_at,
            priority=request.priority,
            metadata=request.metadata,
            assigned_by=assigned_by,
            now=now or utcnow(),
            material_id=material.id
        )

    def assign_course(
        self, db: Session, tenant_id: str, request: AssignCourseRequest, assigned_by: Optional[str] = None, now: Optional[datetime] = None
    ) -> List[TrainingAssignment]:
        if not request.course_id:
            raise TrainingValidationError("course_id is required.")
        user_ids = self._require_users(request.user_ids)

        course = crud_course.get(db, id=request.course_id)
        if not course or course.tenant_id != tenant_id:
            raise NotFoundError(f"Course {request.course_id} not found.")

        return self._fan_out(
            db,
            tenant_id=tenant_id,
            user_ids=user_ids,
            due_at=request.due_at,
            priority=request.priority,
            metadata=request.metadata,
            assigned_by=assigned_by,
            now=now or utcnow(),
            course_id=course.id
        )

    def assign_to_role(
        self, db: Session, tenant_id: str, request: AssignToRoleRequest, assigned_by: Optional[str] = None
    ) -> RoleTrainingAssignment:
        if not request.material_id and not request.course_id:
            raise TrainingValidationError("Either material_id or course_id must be provided.")

        with persistence_guard("Failed to create role assignment", db):
            return crud_assignment.create_role_assignment(db, obj_in={
                "tenant_id": tenant_id,
                "role_id": request.role_id,
                "material_id": request.material_id,
                "course_id": request.course_id,
                "is_required": request.is_required,
                "due_days": request.due_days,
                "assigned_by": assigned_by,
            })

    def get_role_assignments(self, db: Session, tenant_id: str, role_id: Optional[str] = None) -> List[RoleTrainingAssignment]:
        return crud_assignment.get_role_assignments(db, tenant_id=tenant_id, role_id=role_id)

    def list_user_assignments(
        self, db: Session, tenant_id: str, user_id: str, filters: Optional[AssignmentFilter] = None, now: Optional[datetime] = None
    ) -> List[TrainingAssignment]:
        filters = (filters or AssignmentFilter()).model_copy(update={"tenant_id": tenant_id, "user_id": user_id})
        return crud_assignment.get_multi_filtered(db, filters=filters, now=now or utcnow())

    def list_assignments(
        self, db: Session, tenant_id: str, filters: Optional[AssignmentFilter] = None, now: Optional[datetime] = None
    ) -> List[TrainingAssignment]:
        filters = (filters or AssignmentFilter()).model_copy(update={"tenant_id": tenant_id})
        return crud_assignment.get_multi_filtered(db, filters=filters, now=now or utcnow())

    def evaluate(
        self,
        db: Session,
        assignment: TrainingAssignment,
        progress: Optional[int],
        time_spent: Optional[int],
        completed_at: Optional[datetime] = None,
        now: Optional[datetime] = None,
        extra: Optional[dict] = None
    ) -> TrainingAssignment:
        """Recompute status, progress and completion for an assignment and persist it.

        The write happens even when nothing changed.
        """
        now = now or utcnow()
        was_completed = assignment.status == AssignmentStatusEnum.COMPLETED
        update_data = evaluate_state(assignment, progress, time_spent, completed_at, now)
        if extra:
            update_data.update(extra)

        with persistence_guard("Failed to update assignment", db):
            assignment = crud_assignment.update(db, db_obj=assignment, obj_in=update_data)

        if not was_completed and assignment.status == AssignmentStatusEnum.COMPLETED:
            logger.info(f"Assignment {assignment.id} completed by user {assignment.user_id}")
        return assignment

    def update_assignment(
        self, db: Session, assignment_id: str, update_in: AssignmentUpdate, tenant_id: Optional[str] = None, now: Optional[datetime] = None
    ) -> TrainingAssignment:
        assignment = self.get_assignment(db, assignment_id, tenant_id)
        update_data = apply_status_edit(assignment, update_in.model_dump(exclude_unset=True), now or utcnow())

        with persistence_guard("Failed to update assignment", db):
            return crud_assignment.update(db, db_obj=assignment, obj_in=update_data)

    def delete_assignment(self, db: Session, assignment_id: str, tenant_id: Optional[str] = None) -> None:
        assignment = self.get_assignment(db, assignment_id, tenant_id)
        with persistence_guard("Failed to delete assignment", db):
            crud_assignment.delete(db, id=assignment.id)
        logger.info(f"Assignment {assignment_id} deleted")

    def update_progress(
        self,
        db: Session,
        assignment_id: str,
        material_id: str,
        progress_in: ProgressUpdate,
        tenant_id: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> TrainingAssignment:
        now = now or utcnow()
        assignment = self.get_assignment(db, assignment_id, tenant_id)
        material = crud_material.get(db, id=material_id)
        if not material or material.tenant_id != assignment.tenant_id:
            raise NotFoundError(f"Material {material_id} not found.")

        completed_at = ensure_utc(progress_in.completed_at)
        if completed_at is None and progress_in.progress_percentage >= 100:
            completed_at = now

        existing = crud_progress.get_by_assignment_and_material(db, assignment_id=assignment.id, material_id=material_id)
        progress_data = {
            "progress_percentage": clamp_progress(progress_in.progress_percentage),
            "last_position": progress_in.last_position,
            "completed_at": completed_at,
        }
        if progress_in.time_spent_minutes is not None and progress_in.time_spent_minutes >= 0:
            progress_data["time_spent_minutes"] = progress_in.time_spent_minutes

        with persistence_guard("Failed to save progress", db):
            if existing:
                crud_progress.update(db, db_obj=existing, obj_in=progress_data, commit=False)
            else:
                progress_data.update({"assignment_id": assignment.id, "material_id": material_id})
                crud_progress.create(db, obj_in=progress_data, commit=False)

        return self.evaluate(
            db,
            assignment,
            progress_in.progress_percentage,
            progress_in.time_spent_minutes,
            completed_at,
            now=now,
            extra={"last_accessed_at": now}
        )

    def get_progress(self, db: Session, assignment_id: str, tenant_id: Optional[str] = None) -> List[TrainingProgress]:
        assignment = self.get_assignment(db, assignment_id, tenant_id)
        return crud_progress.get_all_by_assignment(db, assignment_id=assignment.id)

    def mark_as_completed(
        self, db: Session, assignment_id: str, tenant_id: Optional[str] = None, now: Optional[datetime] = None
    ) -> TrainingAssignment:
        now = now or utcnow()
        assignment = self.get_assignment(db, assignment_id, tenant_id)
        return self.evaluate(db, assignment, 100, assignment.time_spent_minutes, now, now=now)

    def bulk_update_progress(
        self, db: Session, bulk_in: BulkProgressUpdate, tenant_id: Optional[str] = None, now: Optional[datetime] = None
    ) -> List[TrainingAssignment]:
        return [
            self.update_progress(db, item.assignment_id, item.material_id, item, tenant_id=tenant_id, now=now)
            for item in bulk_in.items
        ]

    def get_overdue_assignments(self, db: Session, tenant_id: str, now: Optional[datetime] = None) -> List[TrainingAssignment]:
        return crud_assignment.get_overdue(db, tenant_id=tenant_id, now=now or utcnow())

    def get_upcoming_deadlines(
        self, db: Session, tenant_id: str, days: int = REMINDER_WINDOW_DAYS, now: Optional[datetime] = None
    ) -> List[TrainingAssignment]:
        return crud_assignment.get_upcoming_deadlines(db, tenant_id=tenant_id, now=now or utcnow(), days=days)


assignment_service = AssignmentService()
