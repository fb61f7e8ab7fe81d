from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class MessageCreate(BaseModel):
    service_request_id: int
    content: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    id:                 int
    service_request_id: int
    sender_id:          int
    sender_role:        str
    receiver_id:        int
    receiver_role:      str
    content:            str
    timestamp:          Optional[datetime] = None

    class Config:
        from_attributes = True
