from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.core.constants import AssignmentStatusEnum
from training_engine.crud.base import CRUDBase
from training_engine.models.assignment import TrainingAssignment
from training_engine.models.role_assignment import RoleTrainingAssignment
from training_engine.schemas.assignment import AssignmentFilter, AssignmentUpdate

class CRUDAssignment(CRUDBase[TrainingAssignment, AssignmentFilter, AssignmentUpdate]):

    def _open_with_due_date(self, db: Session, tenant_id: str):
        return (
            db.query(TrainingAssignment)
            .filter(TrainingAssignment.tenant_id == tenant_id)
            .filter(TrainingAssignment.status != AssignmentStatusEnum.COMPLETED)
            .filter(TrainingAssignment.due_at.isnot(None))
        )

    def get_multi_filtered(
        self, db: Session, *, filters: AssignmentFilter, now: datetime, skip: int = 0, limit: int = 100
    ) -> List[TrainingAssignment]:
        query = db.query(TrainingAssignment)
        if filters.tenant_id:
            query = query.filter(TrainingAssignment.tenant_id == filters.tenant_id)
        if filters.user_id:
            query = query.filter(TrainingAssignment.user_id == filters.user_id)
        if filters.status:
            query = query.filter(TrainingAssignment.status == filters.status)
        if filters.course_id:
            query = query.filter(TrainingAssignment.course_id == filters.course_id)
        if filters.material_id:
            query = query.filter(TrainingAssignment.material_id == filters.material_id)
        if filters.due_before:
            query = query.filter(TrainingAssignment.due_at <= filters.due_before)
        if filters.due_after:
            query = query.filter(TrainingAssignment.due_at >= filters.due_after)
        if filters.overdue_only:
            query = (
                query.filter(TrainingAssignment.due_at.isnot(None))
                .filter(TrainingAssignment.due_at < now)
                .filter(TrainingAssignment.status != AssignmentStatusEnum.COMPLETED)
            )
        return query.order_by(TrainingAssignment.created_at.desc()).offset(skip).limit(limit).all()

    def get_overdue(self, db: Session, *, tenant_id: str, now: datetime) -> List[TrainingAssignment]:
        return (
            self._open_with_due_date(db, tenant_id)
            .filter(TrainingAssignment.due_at < now)
            .order_by(TrainingAssignment.due_at.asc())
            .all()
        )

    def get_upcoming_deadlines(self, db: Session, *, tenant_id: str, now: datetime, days: int) -> List[TrainingAssignment]:
        return (
            self._open_with_due_date(db, tenant_id)
            .filter(TrainingAssignment.due_at >= now)
            .filter(TrainingAssignment.due_at <= now + timedelta(days=days))
            .order_by(TrainingAssignment.due_at.asc())
            .all()
        )

    def get_tenants_with_open_deadlines(self, db: Session) -> List[str]:
        result = (
            db.query(TrainingAssignment.tenant_id)
            .filter(TrainingAssignment.status != AssignmentStatusEnum.COMPLETED)
            .filter(TrainingAssignment.due_at.isnot(None))
            .distinct()
            .all()
        )
        return [row[0] for row in result]

    def create_role_assignment(self, db: Session, *, obj_in: dict) -> RoleTrainingAssignment:
        role_assignment = RoleTrainingAssignment(**obj_in)
        db.add(role_assignment)
        db.commit()
        db.refresh(role_assignment)
        return role_assignment

    def get_role_assignments(self, db: Session, *, tenant_id: str, role_id: Optional[str] = None) -> List[RoleTrainingAssignment]:
        query = db.query(RoleTrainingAssignment).filter(RoleTrainingAssignment.tenant_id == tenant_id)
        if role_id:
            query = query.filter(RoleTrainingAssignment.role_id == role_id)
        return query.order_by(RoleTrainingAssignment.created_at.desc()).all()


assignment = CRUDAssignment(TrainingAssignment)
