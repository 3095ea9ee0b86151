from datetime import timedelta

from sqlalchemy.orm import Session

from training_engine.core import scheduler as scheduler_module
from training_engine.core.exceptions import PersistenceError
from training_engine.crud.notification import notification as crud_notification


def test_scheduler_disabled_in_tests():
    scheduler_module.start_scheduler()
    assert scheduler_module.scheduler.running is False


def test_sweep_all_tenants_reaches_open_deadlines(db_session: Session, material_factory, assignment_factory, now):
    assignment = assignment_factory(material=material_factory(), user_id="sched-user", due_at=now + timedelta(hours=6))

    sent = scheduler_module.sweep_all_tenants(db_session, now=now)

    assert sent >= 1
    notifications = crud_notification.get_for_assignment(db_session, assignment_id=assignment.id)
    assert len(notifications) == 1
    assert notifications[0].type == "reminder"


def test_failing_tenant_does_not_stop_others(db_session: Session, monkeypatch, now):
    swept = []

    def fake_send_reminders(db, tenant_id, now=None):
        swept.append(tenant_id)
        if tenant_id == "broken":
            raise PersistenceError("Reminder sweep for tenant broken failed: locked")
        return ["n1", "n2"]

    monkeypatch.setattr(scheduler_module.crud_assignment, "get_tenants_with_open_deadlines", lambda db: ["broken", "healthy"])
    monkeypatch.setattr(scheduler_module.reminder_service, "send_reminders", fake_send_reminders)

    assert scheduler_module.sweep_all_tenants(db_session, now=now) == 2
    assert swept == ["broken", "healthy"]
