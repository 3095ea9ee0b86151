"""State rules for training assignments.

Every write path (progress updates, quiz submissions, explicit edits,
reminder stamps) funnels through these helpers so status, progress and
priority are derived the same way everywhere. The functions only compute
values; persisting them is up to the caller.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from training_engine.core.constants import AssignmentStatusEnum, DEFAULT_PRIORITY
from training_engine.utils.timeutils import ensure_utc


def normalize_priority(priority: Optional[str]) -> str:
    """Priority is a free-form label kept as given; only a blank one defaults."""
    if priority is None or not str(priority).strip():
        return DEFAULT_PRIORITY
    return str(priority)


def clamp_progress(progress: Optional[int]) -> int:
    if progress is None:
        return 0
    return max(0, min(100, int(progress)))


def is_past_due(due_at: Optional[datetime], now: datetime) -> bool:
    due_at = ensure_utc(due_at)
    return due_at is not None and due_at < now


def overlay_status(status: AssignmentStatusEnum, due_at: Optional[datetime], progress: int, now: datetime) -> AssignmentStatusEnum:
    """Apply the overdue overlay. Completed assignments are never overdue, and
    an overdue assignment whose due date moved into the future falls back to
    the status its progress implies."""
    status = AssignmentStatusEnum(status)
    if status == AssignmentStatusEnum.COMPLETED:
        return status
    if is_past_due(due_at, now):
        return AssignmentStatusEnum.OVERDUE
    if status == AssignmentStatusEnum.OVERDUE:
        return AssignmentStatusEnum.IN_PROGRESS if progress > 0 else AssignmentStatusEnum.ASSIGNED
    return status


def initial_status(due_at: Optional[datetime], now: datetime) -> AssignmentStatusEnum:
    return AssignmentStatusEnum.OVERDUE if is_past_due(due_at, now) else AssignmentStatusEnum.ASSIGNED


def evaluate_state(
    assignment,
    progress: Optional[int],
    time_spent: Optional[int],
    completed_at: Optional[datetime],
    now: datetime
) -> Dict[str, Any]:
    """Compute the lifecycle fields that follow from a progress report.

    time_spent is the accumulated total, not a delta; a negative value keeps
    the stored total. Returns the values to persist for status,
    progress_percentage, time_spent_minutes, completed_at and priority.
    """
    status = AssignmentStatusEnum(assignment.status or AssignmentStatusEnum.ASSIGNED)
    progress = clamp_progress(progress)

    total_time = assignment.time_spent_minutes or 0
    if time_spent is not None and time_spent >= 0:
        total_time = time_spent

    new_completed_at = ensure_utc(assignment.completed_at)

    if completed_at is not None or progress >= 100:
        status = AssignmentStatusEnum.COMPLETED
        new_completed_at = ensure_utc(completed_at) or now
        new_progress = 100
    elif status == AssignmentStatusEnum.COMPLETED:
        # completion only reverts through an explicit status edit
        new_progress = 100
    else:
        new_progress = progress
        if progress > 0 and status == AssignmentStatusEnum.ASSIGNED:
            status = AssignmentStatusEnum.IN_PROGRESS
            new_completed_at = None

    return {
        "status": overlay_status(status, assignment.due_at, new_progress, now),
        "progress_percentage": new_progress,
        "time_spent_minutes": total_time,
        "completed_at": new_completed_at,
        "priority": normalize_priority(assignment.priority),
    }


def apply_status_edit(assignment, changes: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    """Resolve an explicit edit of status, due date, priority or metadata.

    Only keys present in changes are edited. Completing sets completed_at when
    absent and forces 100%; resetting to assigned clears completion and
    progress; any other non-completed status clears completed_at.
    """
    status = AssignmentStatusEnum(assignment.status or AssignmentStatusEnum.ASSIGNED)
    progress = assignment.progress_percentage or 0
    completed_at = ensure_utc(assignment.completed_at)
    due_at = changes["due_at"] if "due_at" in changes else assignment.due_at
    priority = changes["priority"] if changes.get("priority") is not None else assignment.priority

    if changes.get("status") is not None:
        status = AssignmentStatusEnum(changes["status"])
        if status == AssignmentStatusEnum.COMPLETED:
            completed_at = completed_at or now
            progress = 100
        elif status == AssignmentStatusEnum.ASSIGNED:
            completed_at = None
            progress = 0
        else:
            completed_at = None

    result = {
        "status": overlay_status(status, due_at, progress, now),
        "progress_percentage": progress,
        "completed_at": completed_at,
        "due_at": ensure_utc(due_at),
        "priority": normalize_priority(priority),
    }
    if changes.get("metadata") is not None:
        result["metadata_"] = dict(changes["metadata"])
    return result
