from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class PatientCreate(BaseModel):
    name: str
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    description: Optional[str] = None


class PatientResponse(PatientCreate):
    id: int
    owner_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
