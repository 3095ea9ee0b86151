from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.core.constants import AssignmentStatusEnum, REMINDER_WINDOW_DAYS
from training_engine.schemas.response import APIResponse
from training_engine.schemas.assignment import (
    AssignCourseRequest,
    AssignMaterialRequest,
    AssignmentFilter,
    AssignmentUpdate,
    AssignToRoleRequest,
    RoleTrainingAssignment,
    TrainingAssignment,
)
from training_engine.schemas.progress import BulkProgressUpdate, ProgressUpdate, TrainingProgress
from training_engine.services.assignment import assignment_service
from training_engine.utils import deps

router = APIRouter()

def get_assignment_filter(
    status: Optional[AssignmentStatusEnum] = None,
    course_id: Optional[str] = None,
    material_id: Optional[str] = None,
    due_before: Optional[datetime] = None,
    due_after: Optional[datetime] = None,
    overdue_only: bool = False
) -> AssignmentFilter:
    return AssignmentFilter(
        status=status,
        course_id=course_id,
        material_id=material_id,
        due_before=due_before,
        due_after=due_after,
        overdue_only=overdue_only
    )

@router.post("/material", response_model=APIResponse[List[TrainingAssignment]], status_code=201)
async def assign_material(
    request: AssignMaterialRequest,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    """Assign a material to one or more users."""
    assignments = assignment_service.assign_material(db, context.tenant_id, request, assigned_by=context.user_id)
    return APIResponse(message=f"{len(assignments)} assignment(s) created", data=assignments)

@router.post("/course", response_model=APIResponse[List[TrainingAssignment]], status_code=201)
async def assign_course(
    request: AssignCourseRequest,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    """Assign a course to one or more users."""
    assignments = assignment_service.assign_course(db, context.tenant_id, request, assigned_by=context.user_id)
    return APIResponse(message=f"{len(assignments)} assignment(s) created", data=assignments)

@router.post("/role", response_model=APIResponse[RoleTrainingAssignment], status_code=201)
async def assign_to_role(
    request: AssignToRoleRequest,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    role_assignment = assignment_service.assign_to_role(db, context.tenant_id, request, assigned_by=context.user_id)
    return APIResponse(message="Role assignment created", data=role_assignment)

@router.get("/role", response_model=APIResponse[List[RoleTrainingAssignment]])
async def list_role_assignments(
    role_id: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    role_assignments = assignment_service.get_role_assignments(db, context.tenant_id, role_id=role_id)
    return APIResponse(message="Role assignments fetched successfully", data=role_assignments)

@router.get("/", response_model=APIResponse[List[TrainingAssignment]])
async def list_assignments(
    filters: AssignmentFilter = Depends(get_assignment_filter),
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    """List every assignment in the caller's tenant."""
    assignments = assignment_service.list_assignments(db, context.tenant_id, filters)
    return APIResponse(message="Assignments fetched successfully", data=assignments)

@router.get("/me", response_model=APIResponse[List[TrainingAssignment]])
async def list_my_assignments(
    filters: AssignmentFilter = Depends(get_assignment_filter),
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignments = assignment_service.list_user_assignments(db, context.tenant_id, context.user_id, filters)
    return APIResponse(message="Assignments fetched successfully", data=assignments)

@router.get("/users/{user_id}", response_model=APIResponse[List[TrainingAssignment]])
async def list_user_assignments(
    user_id: str,
    filters: AssignmentFilter = Depends(get_assignment_filter),
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignments = assignment_service.list_user_assignments(db, context.tenant_id, user_id, filters)
    return APIResponse(message="Assignments fetched successfully", data=assignments)

@router.get("/overdue", response_model=APIResponse[List[TrainingAssignment]])
async def get_overdue_assignments(
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignments = assignment_service.get_overdue_assignments(db, context.tenant_id)
    return APIResponse(message="Overdue assignments fetched successfully", data=assignments)

@router.get("/upcoming", response_model=APIResponse[List[TrainingAssignment]])
async def get_upcoming_deadlines(
    days: int = Query(REMINDER_WINDOW_DAYS, ge=0, le=365),
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignments = assignment_service.get_upcoming_deadlines(db, context.tenant_id, days=days)
    return APIResponse(message="Upcoming deadlines fetched successfully", data=assignments)

@router.post("/progress/bulk", response_model=APIResponse[List[TrainingAssignment]])
async def bulk_update_progress(
    bulk_in: BulkProgressUpdate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignments = assignment_service.bulk_update_progress(db, bulk_in, tenant_id=context.tenant_id)
    return APIResponse(message="Progress updated successfully", data=assignments)

@router.get("/{assignment_id}", response_model=APIResponse[TrainingAssignment])
async def get_assignment(
    assignment_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignment = assignment_service.get_assignment(db, assignment_id, context.tenant_id)
    return APIResponse(message="Assignment fetched successfully", data=assignment)

@router.put("/{assignment_id}", response_model=APIResponse[TrainingAssignment])
async def update_assignment(
    assignment_id: str,
    update_in: AssignmentUpdate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignment = assignment_service.update_assignment(db, assignment_id, update_in, context.tenant_id)
    return APIResponse(message="Assignment updated successfully", data=assignment)

@router.delete("/{assignment_id}", response_model=APIResponse[None])
async def delete_assignment(
    assignment_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignment_service.delete_assignment(db, assignment_id, context.tenant_id)
    return APIResponse(message="Assignment deleted successfully")

@router.put("/{assignment_id}/progress/{material_id}", response_model=APIResponse[TrainingAssignment])
async def update_progress(
    assignment_id: str,
    material_id: str,
    progress_in: ProgressUpdate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignment = assignment_service.update_progress(db, assignment_id, material_id, progress_in, context.tenant_id)
    return APIResponse(message="Progress updated successfully", data=assignment)

@router.get("/{assignment_id}/progress", response_model=APIResponse[List[TrainingProgress]])
async def get_progress(
    assignment_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    progress = assignment_service.get_progress(db, assignment_id, context.tenant_id)
    return APIResponse(message="Progress fetched successfully", data=progress)

@router.post("/{assignment_id}/complete", response_model=APIResponse[TrainingAssignment])
async def mark_as_completed(
    assignment_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    assignment = assignment_service.mark_as_completed(db, assignment_id, context.tenant_id)
    return APIResponse(message="Assignment marked as completed", data=assignment)
