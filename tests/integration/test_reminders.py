from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from training_engine.core.constants import AssignmentStatusEnum, REMINDER_TITLE
from training_engine.core.exceptions import PersistenceError
from training_engine.crud.notification import notification as crud_notification
from training_engine.services import reminder as reminder_module
from training_engine.services.reminder import reminder_service
from training_engine.utils.timeutils import ensure_utc


@pytest.fixture
def deadline_setup(material_factory, assignment_factory, now):
    material = material_factory()
    return {
        "upcoming": assignment_factory(material=material, user_id="u-upcoming", due_at=now + timedelta(days=1)),
        "overdue": assignment_factory(material=material, user_id="u-overdue", due_at=now - timedelta(days=1), status=AssignmentStatusEnum.OVERDUE),
        "completed": assignment_factory(material=material, user_id="u-done", due_at=now + timedelta(days=1), status=AssignmentStatusEnum.COMPLETED),
        "far": assignment_factory(material=material, user_id="u-far", due_at=now + timedelta(days=5)),
        "undated": assignment_factory(material=material, user_id="u-undated"),
    }


def test_sweep_sends_one_reminder_per_candidate(db_session: Session, tenant_id, deadline_setup, now):
    print("\n[TEST] Reminder sweep")
    sent = reminder_service.send_reminders(db_session, tenant_id, now=now)

    by_assignment = {n.assignment_id: n for n in sent}
    assert set(by_assignment) == {deadline_setup["upcoming"].id, deadline_setup["overdue"].id}

    upcoming = deadline_setup["upcoming"]
    reminder = by_assignment[upcoming.id]
    assert reminder.type == "reminder"
    assert reminder.title == REMINDER_TITLE
    assert reminder.user_id == "u-upcoming"
    due_text = (now + timedelta(days=1)).strftime("%Y-%m-%dT%H:%M:%SZ")
    assert reminder.message == f"Training assignment {upcoming.id} is due {due_text}."

    assert by_assignment[deadline_setup["overdue"].id].type == "deadline"

    db_session.expire_all()
    assert ensure_utc(deadline_setup["upcoming"].reminder_sent_at) == now
    assert deadline_setup["far"].reminder_sent_at is None
    print("[OK] Reminder and deadline notifications sent")


def test_second_sweep_within_cooldown_sends_nothing(db_session: Session, tenant_id, deadline_setup, now):
    first = reminder_service.send_reminders(db_session, tenant_id, now=now)
    second = reminder_service.send_reminders(db_session, tenant_id, now=now + timedelta(hours=11))
    third = reminder_service.send_reminders(db_session, tenant_id, now=now + timedelta(hours=13))

    assert len(first) == 2
    assert second == []
    assert len(third) == 2
    assert len(crud_notification.get_for_user(db_session, user_id="u-upcoming")) >= 2


def test_candidates_are_unique(db_session: Session, tenant_id, deadline_setup, now):
    candidates = reminder_service.collect_candidates(db_session, tenant_id, now)
    ids = [a.id for a in candidates]
    assert len(ids) == len(set(ids)) == 2


def test_sweep_is_scoped_to_tenant(db_session: Session, deadline_setup, now):
    assert reminder_service.send_reminders(db_session, "tenant-without-assignments", now=now) == []


def test_blank_priority_is_normalized_by_sweep(db_session: Session, tenant_id, material_factory, assignment_factory, now):
    assignment = assignment_factory(material=material_factory(), due_at=now + timedelta(hours=5), priority="")

    reminder_service.send_reminders(db_session, tenant_id, now=now)

    db_session.expire_all()
    assert assignment.priority == "normal"


def test_sweep_fails_fast(db_session: Session, tenant_id, deadline_setup, monkeypatch, now):
    real_create = crud_notification.create
    calls = []

    def flaky_create(db, *, obj_in, commit=True):
        calls.append(obj_in["assignment_id"])
        if len(calls) > 1:
            raise OperationalError("INSERT", {}, Exception("disk full"))
        return real_create(db, obj_in=obj_in, commit=commit)

    monkeypatch.setattr(reminder_module.crud_notification, "create", flaky_create)

    with pytest.raises(PersistenceError):
        reminder_service.send_reminders(db_session, tenant_id, now=now)

    assert len(calls) == 2
    db_session.expire_all()
    reminded = [a for a in (deadline_setup["upcoming"], deadline_setup["overdue"]) if a.reminder_sent_at is not None]
    assert len(reminded) == 1
