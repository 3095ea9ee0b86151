from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from training_engine.schemas.response import APIResponse
from training_engine.schemas.analytics import CourseAnalytics, OrganizationAnalytics, UserAnalytics
from training_engine.services.analytics import analytics_service
from training_engine.utils import deps

router = APIRouter()

@router.get("/me", response_model=APIResponse[UserAnalytics])
async def get_my_analytics(
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    data = analytics_service.get_user_analytics(db, context.tenant_id, context.user_id)
    return APIResponse(message="User analytics fetched successfully", data=data)

@router.get("/users/{user_id}", response_model=APIResponse[UserAnalytics])
async def get_user_analytics(
    user_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    data = analytics_service.get_user_analytics(db, context.tenant_id, user_id)
    return APIResponse(message="User analytics fetched successfully", data=data)

@router.get("/courses/{course_id}", response_model=APIResponse[CourseAnalytics])
async def get_course_analytics(
    course_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    data = analytics_service.get_course_analytics(db, course_id, context.tenant_id)
    return APIResponse(message="Course analytics fetched successfully", data=data)

@router.get("/organization", response_model=APIResponse[OrganizationAnalytics])
async def get_organization_analytics(
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    data = analytics_service.get_organization_analytics(db, context.tenant_id)
    return APIResponse(message="Organization analytics fetched successfully", data=data)
