import uuid
from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from training_engine.core.constants import AssignmentStatusEnum
from training_engine.core.exceptions import NotFoundError, TrainingValidationError
from training_engine.crud.progress import progress as crud_progress
from training_engine.schemas.assignment import (
    AssignCourseRequest,
    AssignMaterialRequest,
    AssignmentFilter,
    AssignmentUpdate,
    AssignToRoleRequest,
)
from training_engine.schemas.progress import BulkProgressItem, BulkProgressUpdate, ProgressUpdate
from training_engine.services.assignment import assignment_service
from training_engine.utils.timeutils import ensure_utc


def test_assign_material_with_past_due_date_is_overdue(db_session: Session, tenant_id, material_factory, now):
    print("\n[TEST] Assign material due yesterday")
    material = material_factory()

    assignments = assignment_service.assign_material(
        db_session,
        tenant_id,
        AssignMaterialRequest(material_id=material.id, user_ids=["u1", "u2"], due_at=now - timedelta(days=1)),
        assigned_by="admin-1",
        now=now
    )

    assert len(assignments) == 2
    assert {a.user_id for a in assignments} == {"u1", "u2"}
    for a in assignments:
        assert a.status == AssignmentStatusEnum.OVERDUE
        assert a.priority == "normal"
        assert a.progress_percentage == 0
        assert a.assigned_by == "admin-1"
    print("[OK] Both assignments created as overdue")


def test_assign_material_with_future_due_date_is_assigned(db_session: Session, tenant_id, material_factory, now):
    material = material_factory()

    [a] = assignment_service.assign_material(
        db_session,
        tenant_id,
        AssignMaterialRequest(material_id=material.id, user_ids=["u1"], due_at=now + timedelta(days=5), priority="HIGH", metadata={"batch": "q1"}),
        now=now
    )

    assert a.status == AssignmentStatusEnum.ASSIGNED
    assert a.priority == "HIGH"
    assert a.metadata_ == {"batch": "q1"}
    assert ensure_utc(a.due_at) == now + timedelta(days=5)


def test_assign_requires_target_and_users(db_session: Session, tenant_id, material_factory):
    with pytest.raises(TrainingValidationError):
        assignment_service.assign_material(db_session, tenant_id, AssignMaterialRequest(user_ids=["u1"]))

    material = material_factory()
    with pytest.raises(TrainingValidationError):
        assignment_service.assign_material(db_session, tenant_id, AssignMaterialRequest(material_id=material.id, user_ids=[]))

    with pytest.raises(TrainingValidationError):
        assignment_service.assign_course(db_session, tenant_id, AssignCourseRequest(user_ids=["u1"]))


def test_assign_unknown_or_foreign_material_is_not_found(db_session: Session, tenant_id, material_factory):
    with pytest.raises(NotFoundError):
        assignment_service.assign_material(db_session, tenant_id, AssignMaterialRequest(material_id=str(uuid.uuid4()), user_ids=["u1"]))

    material = material_factory()
    with pytest.raises(NotFoundError):
        assignment_service.assign_material(db_session, "another-tenant", AssignMaterialRequest(material_id=material.id, user_ids=["u1"]))


def test_assign_course_fans_out_per_user(db_session: Session, tenant_id, course_factory, now):
    course = course_factory()

    assignments = assignment_service.assign_course(
        db_session, tenant_id, AssignCourseRequest(course_id=course.id, user_ids=["a", "b", "c"]), now=now
    )

    assert len(assignments) == 3
    assert all(a.course_id == course.id and a.material_id is None for a in assignments)
    assert all(a.status == AssignmentStatusEnum.ASSIGNED for a in assignments)


def test_progress_to_100_completes_assignment(db_session: Session, material_factory, assignment_factory, now):
    print("\n[TEST] Progress to 100 completes the assignment")
    material = material_factory(material_type="document")
    assignment = assignment_factory(material=material)

    print("[1] Reporting 40%")
    updated = assignment_service.update_progress(
        db_session, assignment.id, material.id, ProgressUpdate(progress_percentage=40, time_spent_minutes=15), now=now
    )
    assert updated.status == AssignmentStatusEnum.IN_PROGRESS
    assert updated.progress_percentage == 40
    assert updated.time_spent_minutes == 15
    assert ensure_utc(updated.last_accessed_at) == now

    print("[2] Reporting 100% without a completion timestamp")
    updated = assignment_service.update_progress(
        db_session, assignment.id, material.id, ProgressUpdate(progress_percentage=100, time_spent_minutes=30), now=now
    )
    assert updated.status == AssignmentStatusEnum.COMPLETED
    assert updated.progress_percentage == 100
    assert ensure_utc(updated.completed_at) == now

    rows = crud_progress.get_all_by_assignment(db_session, assignment_id=assignment.id)
    assert len(rows) == 1
    assert rows[0].progress_percentage == 100
    assert rows[0].time_spent_minutes == 30
    assert ensure_utc(rows[0].completed_at) == now
    print("[OK] Completed with one progress row")


def test_progress_is_clamped_and_time_is_kept_when_omitted(db_session: Session, material_factory, assignment_factory, now):
    material = material_factory(material_type="video")
    assignment = assignment_factory(material=material, time_spent_minutes=20)

    updated = assignment_service.update_progress(
        db_session, assignment.id, material.id, ProgressUpdate(progress_percentage=-5), now=now
    )

    assert updated.progress_percentage == 0
    assert updated.time_spent_minutes == 20
    assert updated.status == AssignmentStatusEnum.ASSIGNED


def test_progress_on_past_due_assignment_stays_overdue(db_session: Session, material_factory, assignment_factory, now):
    material = material_factory()
    assignment = assignment_factory(material=material, status=AssignmentStatusEnum.IN_PROGRESS, due_at=now - timedelta(hours=3))

    updated = assignment_service.update_progress(
        db_session, assignment.id, material.id, ProgressUpdate(progress_percentage=60), now=now
    )

    assert updated.status == AssignmentStatusEnum.OVERDUE
    assert updated.progress_percentage == 60


def test_completed_assignment_ignores_lower_progress(db_session: Session, material_factory, assignment_factory, now):
    material = material_factory()
    assignment = assignment_factory(
        material=material, status=AssignmentStatusEnum.COMPLETED, progress_percentage=100, completed_at=now - timedelta(days=1)
    )

    updated = assignment_service.update_progress(
        db_session, assignment.id, material.id, ProgressUpdate(progress_percentage=10), now=now
    )

    assert updated.status == AssignmentStatusEnum.COMPLETED
    assert updated.progress_percentage == 100


def test_mark_as_completed(db_session: Session, material_factory, assignment_factory, now):
    assignment = assignment_factory(material=material_factory(), time_spent_minutes=12, due_at=now - timedelta(days=2))

    updated = assignment_service.mark_as_completed(db_session, assignment.id, now=now)

    assert updated.status == AssignmentStatusEnum.COMPLETED
    assert updated.progress_percentage == 100
    assert updated.time_spent_minutes == 12
    assert ensure_utc(updated.completed_at) == now


def test_explicit_status_edits(db_session: Session, material_factory, assignment_factory, now):
    assignment = assignment_factory(material=material_factory(), status=AssignmentStatusEnum.IN_PROGRESS, progress_percentage=30)

    updated = assignment_service.update_assignment(db_session, assignment.id, AssignmentUpdate(status="completed"), now=now)
    assert updated.status == AssignmentStatusEnum.COMPLETED
    assert updated.progress_percentage == 100
    assert ensure_utc(updated.completed_at) == now

    updated = assignment_service.update_assignment(db_session, assignment.id, AssignmentUpdate(status="assigned"), now=now)
    assert updated.status == AssignmentStatusEnum.ASSIGNED
    assert updated.progress_percentage == 0
    assert updated.completed_at is None

    updated = assignment_service.update_assignment(
        db_session, assignment.id, AssignmentUpdate(due_at=now - timedelta(minutes=1), priority="urgent"), now=now
    )
    assert updated.status == AssignmentStatusEnum.OVERDUE
    assert updated.priority == "urgent"


def test_get_and_delete_assignment(db_session: Session, tenant_id, material_factory, assignment_factory):
    assignment = assignment_factory(material=material_factory())

    assert assignment_service.get_assignment(db_session, assignment.id, tenant_id).id == assignment.id
    with pytest.raises(NotFoundError):
        assignment_service.get_assignment(db_session, assignment.id, "another-tenant")

    assignment_service.delete_assignment(db_session, assignment.id, tenant_id)
    with pytest.raises(NotFoundError):
        assignment_service.get_assignment(db_session, assignment.id)


def test_list_filters(db_session: Session, tenant_id, material_factory, assignment_factory, now):
    material = material_factory()
    other = material_factory()
    late = assignment_factory(material=material, user_id="u1", due_at=now - timedelta(days=1), status=AssignmentStatusEnum.OVERDUE)
    soon = assignment_factory(material=material, user_id="u1", due_at=now + timedelta(days=1))
    assignment_factory(material=other, user_id="u2")
    assignment_factory(material=material, user_id="u1", status=AssignmentStatusEnum.COMPLETED, due_at=now - timedelta(days=3))

    assert len(assignment_service.list_assignments(db_session, tenant_id)) == 4
    assert len(assignment_service.list_user_assignments(db_session, tenant_id, "u1")) == 3

    overdue = assignment_service.list_assignments(db_session, tenant_id, AssignmentFilter(overdue_only=True), now=now)
    assert [a.id for a in overdue] == [late.id]

    by_material = assignment_service.list_assignments(db_session, tenant_id, AssignmentFilter(material_id=other.id))
    assert len(by_material) == 1

    due_after = assignment_service.list_assignments(db_session, tenant_id, AssignmentFilter(due_after=now))
    assert [a.id for a in due_after] == [soon.id]

    by_status = assignment_service.list_user_assignments(db_session, tenant_id, "u1", AssignmentFilter(status=AssignmentStatusEnum.COMPLETED))
    assert len(by_status) == 1


def test_overdue_and_upcoming_reports(db_session: Session, tenant_id, material_factory, assignment_factory, now):
    material = material_factory()
    late = assignment_factory(material=material, due_at=now - timedelta(hours=1))
    soon = assignment_factory(material=material, due_at=now + timedelta(days=2))
    assignment_factory(material=material, due_at=now + timedelta(days=10))
    assignment_factory(material=material, due_at=now - timedelta(days=1), status=AssignmentStatusEnum.COMPLETED)

    assert [a.id for a in assignment_service.get_overdue_assignments(db_session, tenant_id, now=now)] == [late.id]
    assert [a.id for a in assignment_service.get_upcoming_deadlines(db_session, tenant_id, now=now)] == [soon.id]
    assert len(assignment_service.get_upcoming_deadlines(db_session, tenant_id, days=14, now=now)) == 2


def test_bulk_update_progress(db_session: Session, material_factory, assignment_factory, now):
    material = material_factory()
    first = assignment_factory(material=material, user_id="u1")
    second = assignment_factory(material=material, user_id="u2")

    updated = assignment_service.bulk_update_progress(db_session, BulkProgressUpdate(items=[
        BulkProgressItem(assignment_id=first.id, material_id=material.id, progress_percentage=50),
        BulkProgressItem(assignment_id=second.id, material_id=material.id, progress_percentage=100),
    ]), now=now)

    assert [a.status for a in updated] == [AssignmentStatusEnum.IN_PROGRESS, AssignmentStatusEnum.COMPLETED]


def test_assign_to_role_creates_template_only(db_session: Session, tenant_id, material_factory):
    material = material_factory()

    with pytest.raises(TrainingValidationError):
        assignment_service.assign_to_role(db_session, tenant_id, AssignToRoleRequest(role_id="role-1"))

    role_assignment = assignment_service.assign_to_role(
        db_session, tenant_id, AssignToRoleRequest(role_id="role-1", material_id=material.id, is_required=True, due_days=14), assigned_by="admin-1"
    )

    assert role_assignment.due_days == 14
    assert role_assignment.is_required is True
    assert len(assignment_service.get_role_assignments(db_session, tenant_id, role_id="role-1")) == 1
    assert assignment_service.list_assignments(db_session, tenant_id) == []
