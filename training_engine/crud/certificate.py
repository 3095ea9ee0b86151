from sqlalchemy.orm import Session
from typing import List, Optional

from training_engine.crud.base import CRUDBase
from training_engine.models.certificate import Certificate
from training_engine.schemas.certificate import CertificateIssue

class CRUDCertificate(CRUDBase[Certificate, CertificateIssue, CertificateIssue]):

    def get_by_number(self, db: Session, *, certificate_number: str) -> Optional[Certificate]:
        return db.query(Certificate).filter(Certificate.certificate_number == certificate_number).first()

    def get_for_user(self, db: Session, *, user_id: str, tenant_id: Optional[str] = None, valid_only: bool = False) -> List[Certificate]:
        query = db.query(Certificate).filter(Certificate.user_id == user_id)
        if tenant_id:
            query = query.filter(Certificate.tenant_id == tenant_id)
        if valid_only:
            query = query.filter(Certificate.is_valid == True)
        return query.order_by(Certificate.issued_at.desc()).all()

    def get_by_assignment(self, db: Session, *, assignment_id: str) -> List[Certificate]:
        return db.query(Certificate).filter(Certificate.assignment_id == assignment_id).all()


certificate = CRUDCertificate(Certificate)
