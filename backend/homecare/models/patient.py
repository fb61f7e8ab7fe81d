from sqlalchemy import Column, Integer, String, Date, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from homecare.database import Base


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    date_of_birth = Column(Date)
    gender = Column(String(20))
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
