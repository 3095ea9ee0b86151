import logging
import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from training_engine.core.constants import AssignmentStatusEnum, CERTIFICATE_PREFIX, CERTIFICATE_TOKEN_LENGTH
from training_engine.core.exceptions import CertificateInvalidError, NotFoundError, PreconditionError, persistence_guard
from training_engine.crud.certificate import certificate as crud_certificate
from training_engine.models.certificate import Certificate
from training_engine.schemas.certificate import CertificateIssue
from training_engine.services.assignment import assignment_service
from training_engine.utils.timeutils import ensure_utc, utcnow

logger = logging.getLogger(__name__)


def generate_certificate_number() -> str:
    return f"{CERTIFICATE_PREFIX}{uuid.uuid4().hex.upper()[:CERTIFICATE_TOKEN_LENGTH]}"


class CertificateService:

    def issue_certificate(
        self,
        db: Session,
        assignment_id: str,
        issued_by: str,
        tenant_id: Optional[str] = None,
        issue_in: Optional[CertificateIssue] = None,
        now: Optional[datetime] = None
    ) -> Certificate:
        # Issuing twice yields two certificates; nothing dedupes per assignment.
        assignment = assignment_service.get_assignment(db, assignment_id, tenant_id)
        if assignment.status != AssignmentStatusEnum.COMPLETED:
            raise PreconditionError("Assignment must be completed before a certificate can be issued.")

        certificate_in = {
            "tenant_id": assignment.tenant_id,
            "assignment_id": assignment.id,
            "user_id": assignment.user_id,
            "material_id": assignment.material_id,
            "course_id": assignment.course_id,
            "certificate_number": generate_certificate_number(),
            "issued_at": now or utcnow(),
            "expires_at": ensure_utc(issue_in.expires_at) if issue_in else None,
            "is_valid": True,
            "metadata_": {"generated_by": issued_by},
        }
        with persistence_guard("Failed to create certificate", db):
            certificate = crud_certificate.create(db, obj_in=certificate_in)

        logger.info(f"Certificate {certificate.certificate_number} issued for assignment {assignment.id} by {issued_by}")
        return certificate

    def validate_certificate(self, db: Session, certificate_number: str) -> Certificate:
        certificate = crud_certificate.get_by_number(db, certificate_number=certificate_number)
        if not certificate:
            raise NotFoundError(f"Certificate {certificate_number} not found.")
        if not certificate.is_valid:
            raise CertificateInvalidError(f"Certificate {certificate_number} is not valid.")
        return certificate

    def get_certificate(self, db: Session, certificate_id: str, tenant_id: Optional[str] = None) -> Certificate:
        certificate = crud_certificate.get(db, id=certificate_id)
        if not certificate or (tenant_id and certificate.tenant_id != tenant_id):
            raise NotFoundError(f"Certificate {certificate_id} not found.")
        return certificate

    def get_user_certificates(
        self, db: Session, user_id: str, tenant_id: Optional[str] = None, valid_only: bool = False
    ) -> List[Certificate]:
        return crud_certificate.get_for_user(db, user_id=user_id, tenant_id=tenant_id, valid_only=valid_only)

    def revoke_certificate(self, db: Session, certificate_id: str, revoked_by: str, tenant_id: Optional[str] = None) -> Certificate:
        certificate = self.get_certificate(db, certificate_id, tenant_id)
        metadata = dict(certificate.metadata_ or {})
        metadata["revoked_by"] = revoked_by
        with persistence_guard("Failed to revoke certificate", db):
            certificate = crud_certificate.update(db, db_obj=certificate, obj_in={"is_valid": False, "metadata_": metadata})
        logger.info(f"Certificate {certificate.certificate_number} revoked by {revoked_by}")
        return certificate


certificate_service = CertificateService()
