from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.sql import func
from homecare.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    # One collection per request; the unique index backs the payment_collected guard.
    service_request_id = Column(Integer, ForeignKey("service_requests.id"), unique=True, nullable=False)
    client_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    nurse_id = Column(Integer, ForeignKey("nurses.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="paid")
    paid_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
