from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from training_engine.core.constants import AssignmentStatusEnum, PRIORITY_MAX_LENGTH

class AssignMaterialRequest(BaseModel):
    material_id: Optional[str] = None
    user_ids: List[str] = []
    due_at: Optional[datetime] = None
    priority: Optional[str] = Field(default=None, max_length=PRIORITY_MAX_LENGTH)
    metadata: Optional[Dict[str, Any]] = None

class AssignCourseRequest(BaseModel):
    course_id: Optional[str] = None
    user_ids: List[str] = []
    due_at: Optional[datetime] = None
    priority: Optional[str] = Field(default=None, max_length=PRIORITY_MAX_LENGTH)
    metadata: Optional[Dict[str, Any]] = None

class AssignToRoleRequest(BaseModel):
    role_id: str = Field(..., min_length=1)
    material_id: Optional[str] = None
    course_id: Optional[str] = None
    is_required: bool = False
    due_days: Optional[int] = Field(default=None, ge=0)

class AssignmentUpdate(BaseModel):
    status: Optional[AssignmentStatusEnum] = None
    due_at: Optional[datetime] = None
    priority: Optional[str] = Field(default=None, max_length=PRIORITY_MAX_LENGTH)
    metadata: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(use_enum_values=True)

class AssignmentFilter(BaseModel):
    tenant_id: Optional[str] = None
    user_id: Optional[str] = None
    status: Optional[AssignmentStatusEnum] = None
    course_id: Optional[str] = None
    material_id: Optional[str] = None
    due_before: Optional[datetime] = None
    due_after: Optional[datetime] = None
    overdue_only: bool = False

class TrainingAssignment(BaseModel):
    id: str
    tenant_id: str
    material_id: Optional[str] = None
    course_id: Optional[str] = None
    user_id: str
    status: AssignmentStatusEnum
    due_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    assigned_by: Optional[str] = None
    priority: str
    progress_percentage: int
    time_spent_minutes: int
    last_accessed_at: Optional[datetime] = None
    reminder_sent_at: Optional[datetime] = None
    metadata: Optional[Dict[str, Any]] = Field(default=None, validation_alias=AliasChoices("metadata_", "metadata"))
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class RoleTrainingAssignment(BaseModel):
    id: str
    tenant_id: str
    role_id: str
    material_id: Optional[str] = None
    course_id: Optional[str] = None
    is_required: bool
    due_days: Optional[int] = None
    assigned_by: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
