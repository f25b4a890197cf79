from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ChoreCreate(BaseModel):
    label: Optional[str] = None


class ChoreUpdate(ChoreCreate):
    pass


class ChoreOut(BaseModel):
    id: str
    family_id: str
    label: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
