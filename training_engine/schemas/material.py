from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any
from datetime import datetime

from training_engine.core.constants import MaterialKindEnum, MaterialTypeEnum

class MaterialBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    uri: str = Field(..., min_length=1)
    type: MaterialKindEnum
    material_type: MaterialTypeEnum
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None
    is_required: bool = False
    passing_score: Optional[int] = Field(default=None, ge=0, le=100)
    attempts_limit: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(use_enum_values=True)

class MaterialCreate(MaterialBase):
    metadata: Optional[Dict[str, Any]] = None

class MaterialUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    uri: Optional[str] = Field(default=None, min_length=1)
    type: Optional[MaterialKindEnum] = None
    material_type: Optional[MaterialTypeEnum] = None
    duration_minutes: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None
    is_required: Optional[bool] = None
    passing_score: Optional[int] = Field(default=None, ge=0, le=100)
    attempts_limit: Optional[int] = Field(default=None, ge=1)
    metadata: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(use_enum_values=True)

class Material(MaterialBase):
    id: str
    tenant_id: str
    metadata: Optional[Dict[str, Any]] = Field(default=None, validation_alias=AliasChoices("metadata_", "metadata"))
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
