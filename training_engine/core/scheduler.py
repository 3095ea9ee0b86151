import logging
import os
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from training_engine.core.config import settings
from training_engine.core.database import SessionLocal
from training_engine.core.exceptions import TrainingError
from training_engine.crud.assignment import assignment as crud_assignment
from training_engine.services.reminder import reminder_service
from training_engine.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


def sweep_all_tenants(db, now=None) -> int:
    """Run the reminder sweep for every tenant with open deadlines.

    Returns the number of reminders sent. A failing tenant is logged and
    skipped.
    """
    now = now or utcnow()
    total_sent = 0
    for tenant_id in crud_assignment.get_tenants_with_open_deadlines(db):
        try:
            total_sent += len(reminder_service.send_reminders(db, tenant_id, now=now))
        except TrainingError as e:
            logger.error(f"Reminder sweep aborted for tenant {tenant_id}: {e}")
    return total_sent


async def send_training_reminders():
    db = SessionLocal()
    try:
        sent = sweep_all_tenants(db)
        logger.info(f"Training reminder sweep finished: {sent} reminders sent")
    except Exception as e:
        logger.error(f"Error running training reminder sweep: {e}")
    finally:
        db.close()


def start_scheduler():
    if os.getenv("TESTING") == "true" or not settings.SCHEDULER_ENABLED:
        logger.info("Scheduler disabled")
        return

    if not scheduler.running:
        scheduler.add_job(
            send_training_reminders,
            'interval',
            minutes=settings.REMINDER_SWEEP_INTERVAL_MINUTES,
            id='training_reminder_sweep',
            name='Send Training Deadline Reminders',
            replace_existing=True
        )
        scheduler.start()
        logger.info(f"Scheduler started with training reminder sweep every {settings.REMINDER_SWEEP_INTERVAL_MINUTES} minutes")


def stop_scheduler():
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler stopped")
