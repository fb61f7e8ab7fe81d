from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class FAQResponse(BaseModel):
    id: int
    question: str
    answer: str

    class Config:
        from_attributes = True


class SupportRequestCreate(BaseModel):
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class SupportRequestResponse(BaseModel):
    id: int
    requester_id: int
    requester_role: str
    subject: str
    message: str
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
