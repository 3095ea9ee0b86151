from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.schemas.response import APIResponse
from training_engine.schemas.material import Material, MaterialCreate, MaterialUpdate
from training_engine.schemas.quiz import QuizQuestion, QuizQuestionCreate, QuizQuestionUpdate
from training_engine.core.constants import MaterialTypeEnum
from training_engine.services.material import material_service
from training_engine.services.quiz import quiz_service
from training_engine.utils import deps

router = APIRouter()

@router.post("/", response_model=APIResponse[Material], status_code=201)
async def create_material(
    material_in: MaterialCreate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    material = material_service.create_material(db, context.tenant_id, material_in, created_by=context.user_id)
    return APIResponse(message="Material created successfully", data=material)

@router.get("/", response_model=APIResponse[List[Material]])
async def list_materials(
    material_type: Optional[MaterialTypeEnum] = None,
    is_required: Optional[bool] = None,
    search: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    materials = material_service.list_materials(
        db,
        context.tenant_id,
        material_type=material_type.value if material_type else None,
        is_required=is_required,
        search=search,
        skip=skip,
        limit=limit
    )
    return APIResponse(message="Materials fetched successfully", data=materials)

@router.get("/questions/{question_id}", response_model=APIResponse[QuizQuestion])
async def get_question(
    question_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    question = quiz_service.get_question(db, question_id)
    return APIResponse(message="Question fetched successfully", data=question)

@router.put("/questions/{question_id}", response_model=APIResponse[QuizQuestion])
async def update_question(
    question_id: str,
    question_in: QuizQuestionUpdate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    question = quiz_service.update_question(db, question_id, question_in)
    return APIResponse(message="Question updated successfully", data=question)

@router.delete("/questions/{question_id}", response_model=APIResponse[None])
async def delete_question(
    question_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    quiz_service.delete_question(db, question_id)
    return APIResponse(message="Question deleted successfully")

@router.get("/{material_id}", response_model=APIResponse[Material])
async def get_material(
    material_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    material = material_service.get_material(db, material_id, context.tenant_id)
    return APIResponse(message="Material fetched successfully", data=material)

@router.put("/{material_id}", response_model=APIResponse[Material])
async def update_material(
    material_id: str,
    material_in: MaterialUpdate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    material = material_service.update_material(db, material_id, material_in, context.tenant_id)
    return APIResponse(message="Material updated successfully", data=material)

@router.delete("/{material_id}", response_model=APIResponse[None])
async def delete_material(
    material_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    material_service.delete_material(db, material_id, context.tenant_id)
    return APIResponse(message="Material deleted successfully")

@router.post("/{material_id}/questions", response_model=APIResponse[QuizQuestion], status_code=201)
async def create_question(
    material_id: str,
    question_in: QuizQuestionCreate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    question = quiz_service.create_question(db, material_id, question_in, context.tenant_id)
    return APIResponse(message="Question created successfully", data=question)

@router.get("/{material_id}/questions", response_model=APIResponse[List[QuizQuestion]])
async def list_questions(
    material_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    material = material_service.get_material(db, material_id, context.tenant_id)
    questions = quiz_service.list_questions(db, material.id)
    return APIResponse(message="Questions fetched successfully", data=questions)
