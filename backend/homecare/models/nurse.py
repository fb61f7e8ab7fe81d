from sqlalchemy import Column, Integer, String, Float, Date, DateTime, JSON
from sqlalchemy.sql import func
from homecare.database import Base


class Nurse(Base):
    __tablename__ = "nurses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    user_name = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    gender = Column(String(20))
    date_of_birth = Column(Date)
    rate = Column(Float)
    certificates = Column(JSON, default=list)
    specialty = Column(String(200))
    location = Column(String(200))
    availability = Column(JSON, default=list)   # [{"day", "start", "end"}]
    created_at = Column(DateTime(timezone=True), server_default=func.now())
