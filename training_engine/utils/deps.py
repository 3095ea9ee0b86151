from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException, status

from training_engine.core.database import SessionLocal


@dataclass
class RequestContext:
    """Caller identity taken from the gateway headers."""
    tenant_id: str
    user_id: str


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_request_context(
    x_tenant_id: Optional[str] = Header(default=None),
    x_user_id: Optional[str] = Header(default=None)
) -> RequestContext:
    if not x_tenant_id or not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Tenant-ID and X-User-ID headers are required."
        )
    return RequestContext(tenant_id=x_tenant_id, user_id=x_user_id)
