from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from homecare.database import Base


class Message(Base):
    __tablename__ = "messages"

    id                 = Column(Integer, primary_key=True, autoincrement=True)
    service_request_id = Column(Integer, ForeignKey("service_requests.id"), nullable=False, index=True)
    sender_id          = Column(Integer, nullable=False)
    sender_role        = Column(String(20), nullable=False)   # "client" | "nurse"
    receiver_id        = Column(Integer, nullable=False)
    receiver_role      = Column(String(20), nullable=False)
    content            = Column(Text, nullable=False)
    timestamp          = Column(DateTime(timezone=True), server_default=func.now())
