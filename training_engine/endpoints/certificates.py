from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.schemas.response import APIResponse
from training_engine.schemas.certificate import Certificate, CertificateIssue
from training_engine.services.certificate import certificate_service
from training_engine.utils import deps

router = APIRouter()

@router.post("/assignments/{assignment_id}", response_model=APIResponse[Certificate], status_code=201)
async def issue_certificate(
    assignment_id: str,
    issue_in: Optional[CertificateIssue] = None,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    """Issue a certificate for a completed assignment."""
    certificate = certificate_service.issue_certificate(
        db, assignment_id, issued_by=context.user_id, tenant_id=context.tenant_id, issue_in=issue_in
    )
    return APIResponse(message="Certificate issued successfully", data=certificate)

@router.get("/validate/{certificate_number}", response_model=APIResponse[Certificate])
async def validate_certificate(
    certificate_number: str,
    db: Session = Depends(deps.get_db)
):
    """Public lookup of a certificate by its number."""
    certificate = certificate_service.validate_certificate(db, certificate_number)
    return APIResponse(message="Certificate is valid", data=certificate)

@router.get("/me", response_model=APIResponse[List[Certificate]])
async def get_my_certificates(
    valid_only: bool = False,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    certificates = certificate_service.get_user_certificates(db, context.user_id, context.tenant_id, valid_only=valid_only)
    return APIResponse(message="Certificates fetched successfully", data=certificates)

@router.get("/users/{user_id}", response_model=APIResponse[List[Certificate]])
async def get_user_certificates(
    user_id: str,
    valid_only: bool = False,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    certificates = certificate_service.get_user_certificates(db, user_id, context.tenant_id, valid_only=valid_only)
    return APIResponse(message="Certificates fetched successfully", data=certificates)

@router.get("/{certificate_id}", response_model=APIResponse[Certificate])
async def get_certificate(
    certificate_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    certificate = certificate_service.get_certificate(db, certificate_id, context.tenant_id)
    return APIResponse(message="Certificate fetched successfully", data=certificate)

@router.post("/{certificate_id}/revoke", response_model=APIResponse[Certificate])
async def revoke_certificate(
    certificate_id: str,
    db: Session = Depends(deps.get_db),
    context: deps.RequestContext = Depends(deps.get_request_context)
):
    certificate = certificate_service.revoke_certificate(db, certificate_id, revoked_by=context.user_id, tenant_id=context.tenant_id)
    return APIResponse(message="Certificate revoked", data=certificate)
