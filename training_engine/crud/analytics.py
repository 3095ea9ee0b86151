from datetime import datetime
from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from training_engine.core.constants import AssignmentStatusEnum
from training_engine.models.assignment import TrainingAssignment
from training_engine.models.course import Course
from training_engine.models.material import Material
from training_engine.models.quiz_attempt import QuizAttempt
from training_engine.schemas.analytics import CourseAnalytics, OrganizationAnalytics, UserAnalytics


def _rate(part: int, total: int) -> float:
    return round(part * 100.0 / total, 2) if total else 0.0


class CRUDAnalytics:
    """Aggregate queries over the training tables. Nothing here writes."""

    def _status_counts(self, query, now: datetime):
        completed = func.sum(case((TrainingAssignment.status == AssignmentStatusEnum.COMPLETED, 1), else_=0))
        in_progress = func.sum(case((TrainingAssignment.status == AssignmentStatusEnum.IN_PROGRESS, 1), else_=0))
        overdue = func.sum(
            case(
                (
                    (TrainingAssignment.status != AssignmentStatusEnum.COMPLETED)
                    & TrainingAssignment.due_at.isnot(None)
                    & (TrainingAssignment.due_at < now),
                    1,
                ),
                else_=0,
            )
        )
        row = query.with_entities(
            func.count(TrainingAssignment.id),
            completed,
            in_progress,
            overdue,
            func.avg(TrainingAssignment.time_spent_minutes),
        ).one()
        total, completed_count, in_progress_count, overdue_count, avg_time = row
        return (
            total or 0,
            int(completed_count or 0),
            int(in_progress_count or 0),
            int(overdue_count or 0),
            round(float(avg_time or 0.0), 2),
        )

    def _average_percentage(self, query) -> float:
        value = (
            query.filter(QuizAttempt.max_score > 0)
            .with_entities(func.avg(QuizAttempt.score * 100.0 / QuizAttempt.max_score))
            .scalar()
        )
        return round(float(value or 0.0), 2)

    def get_user_analytics(self, db: Session, *, tenant_id: str, user_id: str, now: datetime) -> UserAnalytics:
        assignments = (
            db.query(TrainingAssignment)
            .filter(TrainingAssignment.tenant_id == tenant_id)
            .filter(TrainingAssignment.user_id == user_id)
        )
        total, completed, in_progress, overdue, avg_time = self._status_counts(assignments, now)
        user_attempts = (
            db.query(QuizAttempt)
            .join(Material, QuizAttempt.material_id == Material.id)
            .filter(Material.tenant_id == tenant_id)
            .filter(QuizAttempt.user_id == user_id)
        )
        average_score = self._average_percentage(user_attempts)
        return UserAnalytics(
            user_id=user_id,
            total_assignments=total,
            completed_assignments=completed,
            in_progress_assignments=in_progress,
            overdue_assignments=overdue,
            completion_rate=_rate(completed, total),
            average_time_spent=avg_time,
            average_score=average_score,
        )

    def get_course_analytics(self, db: Session, *, course_id: str, now: datetime) -> CourseAnalytics:
        assignments = db.query(TrainingAssignment).filter(TrainingAssignment.course_id == course_id)
        total, completed, _, _, avg_time = self._status_counts(assignments, now)
        course_assignment_ids = select(TrainingAssignment.id).where(TrainingAssignment.course_id == course_id)
        average_score = self._average_percentage(
            db.query(QuizAttempt).filter(QuizAttempt.assignment_id.in_(course_assignment_ids))
        )
        return CourseAnalytics(
            course_id=course_id,
            total_assignments=total,
            completed_assignments=completed,
            completion_rate=_rate(completed, total),
            average_time_spent=avg_time,
            average_score=average_score,
        )

    def get_organization_analytics(self, db: Session, *, tenant_id: str, now: datetime) -> OrganizationAnalytics:
        assignments = db.query(TrainingAssignment).filter(TrainingAssignment.tenant_id == tenant_id)
        total, completed, _, overdue, avg_time = self._status_counts(assignments, now)
        return OrganizationAnalytics(
            tenant_id=tenant_id,
            total_materials=db.query(Material).filter(Material.tenant_id == tenant_id).count(),
            total_courses=db.query(Course).filter(Course.tenant_id == tenant_id).count(),
            total_assignments=total,
            completed_assignments=completed,
            overdue_assignments=overdue,
            completion_rate=_rate(completed, total),
            average_time_spent=avg_time,
        )


analytics = CRUDAnalytics()
