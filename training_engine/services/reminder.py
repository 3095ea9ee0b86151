import logging
from datetime import datetime, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session

from training_engine.core.constants import (
    NotificationTypeEnum,
    REMINDER_COOLDOWN_HOURS,
    REMINDER_TITLE,
    REMINDER_WINDOW_DAYS,
)
from training_engine.core.exceptions import persistence_guard
from training_engine.crud.assignment import assignment as crud_assignment
from training_engine.crud.notification import notification as crud_notification
from training_engine.models.assignment import TrainingAssignment
from training_engine.models.notification import TrainingNotification
from training_engine.services.lifecycle import is_past_due, normalize_priority
from training_engine.utils.timeutils import ensure_utc, utcnow

logger = logging.getLogger(__name__)


def reminder_message(assignment: TrainingAssignment) -> str:
    due_at = ensure_utc(assignment.due_at)
    due_text = due_at.strftime("%Y-%m-%dT%H:%M:%SZ") if due_at else "soon"
    return f"Training assignment {assignment.id} is due {due_text}."


def in_cooldown(assignment: TrainingAssignment, now: datetime) -> bool:
    last_sent = ensure_utc(assignment.reminder_sent_at)
    return last_sent is not None and now - last_sent < timedelta(hours=REMINDER_COOLDOWN_HOURS)


class ReminderService:

    def collect_candidates(self, db: Session, tenant_id: str, now: datetime) -> List[TrainingAssignment]:
        """Upcoming and overdue assignments, each at most once."""
        upcoming = crud_assignment.get_upcoming_deadlines(db, tenant_id=tenant_id, now=now, days=REMINDER_WINDOW_DAYS)
        overdue = crud_assignment.get_overdue(db, tenant_id=tenant_id, now=now)

        candidates = {}
        for assignment in upcoming + overdue:
            candidates.setdefault(assignment.id, assignment)
        return list(candidates.values())

    def send_reminders(self, db: Session, tenant_id: str, now: Optional[datetime] = None) -> List[TrainingNotification]:
        """Run one reminder sweep for a tenant.

        Stops at the first store failure; reminders already sent in this sweep
        stay committed.
        """
        now = now or utcnow()
        sent = []

        with persistence_guard(f"Reminder sweep for tenant {tenant_id} failed", db):
            candidates = self.collect_candidates(db, tenant_id, now)

            for assignment in candidates:
                if in_cooldown(assignment, now):
                    continue

                notification_type = NotificationTypeEnum.DEADLINE if is_past_due(assignment.due_at, now) else NotificationTypeEnum.REMINDER
                notification = crud_notification.create(db, obj_in={
                    "tenant_id": tenant_id,
                    "assignment_id": assignment.id,
                    "user_id": assignment.user_id,
                    "type": notification_type.value,
                    "title": REMINDER_TITLE,
                    "message": reminder_message(assignment),
                    "is_read": False,
                    "sent_at": now,
                })
                crud_assignment.update(db, db_obj=assignment, obj_in={
                    "reminder_sent_at": now,
                    "priority": normalize_priority(assignment.priority),
                })
                sent.append(notification)

        logger.info(f"Reminder sweep for tenant {tenant_id}: {len(sent)} sent out of {len(candidates)} candidates")
        return sent


reminder_service = ReminderService()
