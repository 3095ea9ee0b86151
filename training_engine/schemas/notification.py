from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

from training_engine.core.constants import NotificationTypeEnum

class NotificationBase(BaseModel):
    """Base schema for a training notification."""
    type: str
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)

class NotificationCreate(NotificationBase):
    """Schema for an explicit notification request; recipient defaults to the assignee."""
    assignment_id: str = Field(..., min_length=1)
    user_id: Optional[str] = None
    type: NotificationTypeEnum

    model_config = ConfigDict(use_enum_values=True)

class Notification(NotificationBase):
    """Schema for reading a notification, includes ID and read status."""
    id: str
    tenant_id: str
    assignment_id: str
    user_id: str
    is_read: bool
    sent_at: datetime
    read_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
