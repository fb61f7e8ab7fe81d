from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional
from homecare.schemas.patient import PatientResponse


class ServiceRequestCreate(BaseModel):
    nurse_id: int
    patient_ids: list[int] = Field(..., min_length=1)
    details: Optional[str] = None
    scheduled_date: Optional[date] = None
    rate: float = Field(..., ge=0)


class ServiceRequestRespond(BaseModel):
    state: str


class ServiceRequestComplete(BaseModel):
    service_notes: str


class ServiceReportCreate(BaseModel):
    observations: str
    recommendations: Optional[str] = None


class ServiceReport(BaseModel):
    observations: Optional[str] = None
    recommendations: Optional[str] = None


class ServiceRequestResponse(BaseModel):
    id: int
    client_id: int
    nurse_id: int
    patient_ids: list[int]
    details: Optional[str] = None
    scheduled_date: Optional[date] = None
    rate: float
    state: str
    payment_collected: bool
    payment_released: bool
    service_notes: Optional[str] = None
    report: Optional[ServiceReport] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentStatus(BaseModel):
    state: str
    payment_collected: bool
    payment_released: bool

    class Config:
        from_attributes = True


class ServiceRequestDetail(ServiceRequestResponse):
    """Single request as a participant sees it: nurse name and patient records."""
    nurse_name: Optional[str] = None
    patients: list[PatientResponse] = []
