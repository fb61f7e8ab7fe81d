from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Optional


class LoginRequest(BaseModel):
    user_name: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str


class UserRegister(BaseModel):
    name: str
    user_name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    photo: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    name: str
    user_name: str
    photo: Optional[str] = None
    verified: bool = False

    class Config:
        from_attributes = True


class AvailabilitySlot(BaseModel):
    day: str
    start: str
    end: str


class NurseRegister(BaseModel):
    name: str
    user_name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    rate: Optional[float] = None
    certificates: list[str] = []
    specialty: Optional[str] = None
    location: Optional[str] = None
    availability: list[AvailabilitySlot] = []


class NurseUpdate(BaseModel):
    name: Optional[str] = None
    rate: Optional[float] = None
    certificates: Optional[list[str]] = None
    specialty: Optional[str] = None
    location: Optional[str] = None

    @field_validator("name", "certificates")
    @classmethod
    def not_null(cls, value):
        # Omit a field to leave it unchanged; these columns cannot be cleared.
        if value is None:
            raise ValueError("must not be null")
        return value


class AvailabilityUpdate(BaseModel):
    availability: list[AvailabilitySlot]


class NursePublic(BaseModel):
    """Directory entry: no login name, no password hash."""
    id: int
    name: str
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    rate: Optional[float] = None
    certificates: list[str] = []
    specialty: Optional[str] = None
    location: Optional[str] = None
    availability: list[AvailabilitySlot] = []

    class Config:
        from_attributes = True


class NurseResponse(NursePublic):
    user_name: str


class UserRegistered(BaseModel):
    user: UserResponse
    token: str
    role: str


class NurseRegistered(BaseModel):
    nurse: NurseResponse
    token: str
    role: str
