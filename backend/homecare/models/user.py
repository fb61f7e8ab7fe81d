from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from homecare.database import Base


class User(Base):
    """A client: the party who owns patients and books nurses."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    user_name = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    photo = Column(String(500))
    verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
