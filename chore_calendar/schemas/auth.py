from pydantic import BaseModel, Field
from typing import Optional


class AdminLoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class MemberLoginRequest(BaseModel):
    email: Optional[str] = None


class AdminSummary(BaseModel):
    id: str
    email: str
    family_id: str = Field(alias="familyId")

    class Config:
        from_attributes = True
        populate_by_name = True


class PersonSummary(BaseModel):
    id: str
    name: str
    email: str
    family_id: str = Field(alias="familyId")

    class Config:
        from_attributes = True
        populate_by_name = True


class AdminLoginResponse(BaseModel):
    token: str
    admin: AdminSummary


class MemberLoginResponse(BaseModel):
    token: str
    person: PersonSummary
