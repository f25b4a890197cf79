from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class WeekAssignmentCreate(BaseModel):
    """Assign one chore to one person for every day of a week"""
    person_id: Optional[str] = Field(None, alias="personId")
    chore_id: Optional[str] = Field(None, alias="choreId")
    week_start_iso: Optional[str] = Field(None, alias="weekStartISO")

    class Config:
        populate_by_name = True


class AssignmentCreate(WeekAssignmentCreate):
    # 0 = Sunday ... 6 = Saturday
    day_index: Optional[int] = Field(None, alias="dayIndex")


class AssignmentOut(BaseModel):
    id: str
    family_id: str
    person_id: str
    chore_id: str
    week_start_iso: str
    day_index: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
