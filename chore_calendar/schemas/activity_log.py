from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class ActivityLogResponse(BaseModel):
    """Schema for activity log responses"""
    id: int
    family_id: str
    principal_id: str
    principal_role: str
    action: str
    description: str
    table_name: Optional[str] = None
    record_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime

    class Config:
        from_attributes = True
