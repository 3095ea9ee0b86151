from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.schemas.response import APIResponse
from training_engine.schemas.course import Course, CourseCreate, CourseMaterial, CourseMaterialCreate, CourseUpdate, CourseWithMaterials
from training_engine.services.course import course_service
from training_engine.utils import deps

router = APIRouter()

@router.post("/", response_model=APIResponse[Course], status_code=201)
async def create_course(
    course_in: CourseCreate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    course = course_service.create_course(db, context.tenant_id, course_in, created_by=context.user_id)
    return APIResponse(message="Course created successfully", data=course)

@router.get("/", response_model=APIResponse[List[Course]])
async def list_courses(
    is_active: Optional[bool] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    courses = course_service.list_courses(db, context.tenant_id, is_active=is_active, skip=skip, limit=limit)
    return APIResponse(message="Courses fetched successfully", data=courses)

@router.get("/{course_id}", response_model=APIResponse[CourseWithMaterials])
async def get_course(
    course_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    course = course_service.get_course(db, course_id, context.tenant_id)
    return APIResponse(message="Course fetched successfully", data=course)

@router.put("/{course_id}", response_model=APIResponse[Course])
async def update_course(
    course_id: str,
    course_in: CourseUpdate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    course = course_service.update_course(db, course_id, course_in, context.tenant_id)
    return APIResponse(message="Course updated successfully", data=course)

@router.delete("/{course_id}", response_model=APIResponse[None])
async def delete_course(
    course_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    course_service.delete_course(db, course_id, context.tenant_id)
    return APIResponse(message="Course deleted successfully")

@router.get("/{course_id}/materials", response_model=APIResponse[List[CourseMaterial]])
async def get_course_materials(
    course_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    materials = course_service.get_course_materials(db, course_id, context.tenant_id)
    return APIResponse(message="Course materials fetched successfully", data=materials)

@router.post("/{course_id}/materials/{material_id}", response_model=APIResponse[CourseMaterial], status_code=201)
async def add_material_to_course(
    course_id: str,
    material_id: str,
    link_in: CourseMaterialCreate,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    course_material = course_service.add_material(db, course_id, material_id, link_in, context.tenant_id)
    return APIResponse(message="Material added to course", data=course_material)

@router.delete("/{course_id}/materials/{material_id}", response_model=APIResponse[None])
async def remove_material_from_course(
    course_id: str,
    material_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    course_service.remove_material(db, course_id, material_id, context.tenant_id)
    return APIResponse(message="Material removed from course")
