from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from training_engine.schemas.material import Material

class CourseBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: bool = True

class CourseCreate(CourseBase):
    pass

class CourseUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_active: Optional[bool] = None

class Course(CourseBase):
    id: str
    tenant_id: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class CourseMaterialCreate(BaseModel):
    order_index: int = 0
    is_required: bool = True

class CourseMaterial(BaseModel):
    id: str
    course_id: str
    material_id: str
    order_index: int
    is_required: bool
    created_at: Optional[datetime] = None
    material: Optional[Material] = None

    model_config = ConfigDict(from_attributes=True)

class CourseWithMaterials(Course):
    course_materials: List[CourseMaterial] = []
