from sqlalchemy import Column, Integer, String, Text, Date, Float, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func
from homecare.database import Base

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"
COMPLETED = "completed"

STATES = (PENDING, ACCEPTED, REJECTED, COMPLETED)


class ServiceRequest(Base):
    __tablename__ = "service_requests"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    nurse_id = Column(Integer, ForeignKey("nurses.id"), nullable=False, index=True)
    patient_ids = Column(JSON, nullable=False, default=list)
    details = Column(Text)
    scheduled_date = Column(Date)
    rate = Column(Float, nullable=False)
    state = Column(String(20), nullable=False, default=PENDING, index=True)
    payment_collected = Column(Boolean, nullable=False, default=False)
    payment_released = Column(Boolean, nullable=False, default=False)
    service_notes = Column(Text)
    observations = Column(Text)
    recommendations = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def report(self):
        if self.observations is None and self.recommendations is None:
            return None
        return {"observations": self.observations, "recommendations": self.recommendations}
