import re
import uuid
from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from training_engine.core.constants import AssignmentStatusEnum
from training_engine.core.exceptions import CertificateInvalidError, NotFoundError, PreconditionError
from training_engine.schemas.certificate import CertificateIssue
from training_engine.services.certificate import certificate_service, generate_certificate_number
from training_engine.utils.timeutils import ensure_utc

CERTIFICATE_NUMBER = re.compile(r"^CERT-[0-9A-F]{8}$")


def test_certificate_number_format():
    numbers = {generate_certificate_number() for _ in range(50)}
    assert all(CERTIFICATE_NUMBER.match(n) for n in numbers)
    assert len(numbers) == 50


def test_issue_requires_completed_assignment(db_session: Session, material_factory, assignment_factory):
    assignment = assignment_factory(material=material_factory(), status=AssignmentStatusEnum.IN_PROGRESS, progress_percentage=50)

    with pytest.raises(PreconditionError):
        certificate_service.issue_certificate(db_session, assignment.id, issued_by="admin-1")


def test_issue_on_completed_assignment(db_session: Session, tenant_id, material_factory, assignment_factory, now):
    print("\n[TEST] Certificate issuance")
    material = material_factory()
    assignment = assignment_factory(material=material, status=AssignmentStatusEnum.COMPLETED, progress_percentage=100, completed_at=now)

    certificate = certificate_service.issue_certificate(
        db_session, assignment.id, issued_by="admin-1", tenant_id=tenant_id,
        issue_in=CertificateIssue(expires_at=now + timedelta(days=365)), now=now
    )

    assert CERTIFICATE_NUMBER.match(certificate.certificate_number)
    assert certificate.is_valid is True
    assert certificate.user_id == assignment.user_id
    assert certificate.material_id == material.id
    assert certificate.metadata_ == {"generated_by": "admin-1"}
    assert ensure_utc(certificate.issued_at) == now
    assert ensure_utc(certificate.expires_at) == now + timedelta(days=365)
    print(f"[OK] Issued {certificate.certificate_number}")


def test_issuing_twice_returns_distinct_numbers(db_session: Session, material_factory, assignment_factory, now):
    assignment = assignment_factory(material=material_factory(), status=AssignmentStatusEnum.COMPLETED, progress_percentage=100, completed_at=now)

    first = certificate_service.issue_certificate(db_session, assignment.id, issued_by="admin-1")
    second = certificate_service.issue_certificate(db_session, assignment.id, issued_by="admin-1")

    assert first.certificate_number != second.certificate_number
    assert first.id != second.id


def test_validate_certificate(db_session: Session, tenant_id, material_factory, assignment_factory, now):
    assignment = assignment_factory(material=material_factory(), status=AssignmentStatusEnum.COMPLETED, progress_percentage=100, completed_at=now)
    certificate = certificate_service.issue_certificate(db_session, assignment.id, issued_by="admin-1")

    assert certificate_service.validate_certificate(db_session, certificate.certificate_number).id == certificate.id

    with pytest.raises(NotFoundError):
        certificate_service.validate_certificate(db_session, f"CERT-{uuid.uuid4().hex[:8]}")

    revoked = certificate_service.revoke_certificate(db_session, certificate.id, revoked_by="auditor", tenant_id=tenant_id)
    assert revoked.is_valid is False
    assert revoked.metadata_["revoked_by"] == "auditor"

    with pytest.raises(CertificateInvalidError):
        certificate_service.validate_certificate(db_session, certificate.certificate_number)


def test_user_certificates(db_session: Session, tenant_id, material_factory, assignment_factory, now):
    material = material_factory()
    done = assignment_factory(material=material, user_id="cert-user", status=AssignmentStatusEnum.COMPLETED, progress_percentage=100, completed_at=now)
    kept = certificate_service.issue_certificate(db_session, done.id, issued_by="admin-1")
    revoked = certificate_service.issue_certificate(db_session, done.id, issued_by="admin-1")
    certificate_service.revoke_certificate(db_session, revoked.id, revoked_by="admin-1")

    assert len(certificate_service.get_user_certificates(db_session, "cert-user", tenant_id)) == 2
    valid = certificate_service.get_user_certificates(db_session, "cert-user", tenant_id, valid_only=True)
    assert [c.id for c in valid] == [kept.id]

    assert certificate_service.get_certificate(db_session, kept.id, tenant_id).id == kept.id
    with pytest.raises(NotFoundError):
        certificate_service.get_certificate(db_session, kept.id, "another-tenant")
