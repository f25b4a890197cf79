from pydantic import BaseModel
from typing import Optional
from datetime import datetime

# Fields are optional here so missing and blank values both get the same
# 400 from the controller instead of a schema error.


class PersonCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class PersonUpdate(PersonCreate):
    color: Optional[str] = None


class PersonOut(BaseModel):
    id: str
    family_id: str
    name: str
    email: str
    phone: Optional[str] = None
    color: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
