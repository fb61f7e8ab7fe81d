from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class TransactionResponse(BaseModel):
    id: int
    service_request_id: int
    client_id: int
    nurse_id: int
    amount: float
    status: str
    paid_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Invoice(BaseModel):
    transaction_id: int
    service_request_id: int
    client_id: int
    nurse_id: int
    amount: float
    status: str
    paid_at: Optional[datetime] = None
    issued_at: datetime
    details: str
