from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.schemas.response import APIResponse
from training_engine.schemas.quiz import QuizAttempt, QuizAttemptResult, QuizAttemptSubmit
from training_engine.services.quiz import quiz_service
from training_engine.utils import deps

router = APIRouter()

@router.post("/", response_model=APIResponse[QuizAttemptResult], status_code=201)
async def submit_quiz_attempt(
    attempt_in: QuizAttemptSubmit,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    """Grade a quiz submission and update the linked assignment, if any."""
    result = quiz_service.submit_attempt(db, attempt_in, submitted_by=context.user_id, tenant_id=context.tenant_id)
    return APIResponse(message="Quiz attempt graded", data=result)

@router.get("/", response_model=APIResponse[List[QuizAttempt]])
async def list_quiz_attempts(
    assignment_id: Optional[str] = None,
    material_id: Optional[str] = None,
    user_id: Optional[str] = None,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    attempts = quiz_service.list_attempts(
        db, assignment_id=assignment_id, material_id=material_id, user_id=user_id, tenant_id=context.tenant_id
    )
    return APIResponse(message="Quiz attempts fetched successfully", data=attempts)

@router.get("/{attempt_id}", response_model=APIResponse[QuizAttempt])
async def get_quiz_attempt(
    attempt_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    attempt = quiz_service.get_attempt(db, attempt_id, context.tenant_id)
    return APIResponse(message="Quiz attempt fetched successfully", data=attempt)
