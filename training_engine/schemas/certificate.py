from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any
from datetime import datetime

class CertificateIssue(BaseModel):
    expires_at: Optional[datetime] = None

class Certificate(BaseModel):
    id: str
    tenant_id: str
    assignment_id: str
    user_id: str
    material_id: Optional[str] = None
    course_id: Optional[str] = None
    certificate_number: str
    issued_at: datetime
    expires_at: Optional[datetime] = None
    is_valid: bool
    metadata: Optional[Dict[str, Any]] = Field(default=None, validation_alias=AliasChoices("metadata_", "metadata"))
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
