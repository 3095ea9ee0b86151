from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class ProgressUpdate(BaseModel):
    progress_percentage: int
    time_spent_minutes: Optional[int] = None # accumulated total; omitted keeps the stored value
    last_position: Optional[int] = None
    completed_at: Optional[datetime] = None


class BulkProgressItem(ProgressUpdate):
    assignment_id: str = Field(..., min_length=1)
    material_id: str = Field(..., min_length=1)


class BulkProgressUpdate(BaseModel):
    items: List[BulkProgressItem]


class TrainingProgress(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    assignment_id: str
    material_id: str
    progress_percentage: int
    time_spent_minutes: int
    last_position: Optional[int] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
