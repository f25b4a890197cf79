from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, Field

from chore_calendar.schemas.assignment import AssignmentOut
from chore_calendar.schemas.auth import AdminSummary
from chore_calendar.schemas.chore import ChoreOut
from chore_calendar.schemas.person import PersonOut


class FamilyCreate(BaseModel):
    name: Optional[str] = None
    admin_email: Optional[str] = Field(None, alias="adminEmail")
    admin_password: Optional[str] = Field(None, alias="adminPassword")

    class Config:
        populate_by_name = True


class AdminCreate(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminOut(BaseModel):
    id: str
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FamilyDetail(BaseModel):
    """A family with everything it owns"""
    id: str
    name: str
    created_at: Optional[datetime] = None
    admins: List[AdminOut]
    people: List[PersonOut]
    chores: List[ChoreOut]
    assignments: List[AssignmentOut]

    class Config:
        from_attributes = True


class FamilyCreateResponse(BaseModel):
    token: str
    family: FamilyDetail
    admin: AdminSummary


class MessageResponse(BaseModel):
    message: str
