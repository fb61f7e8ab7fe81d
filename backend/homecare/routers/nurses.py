from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from homecare.database import get_db
from homecare.auth import NURSE, Identity, create_token, get_current_user, require_nurse
from homecare.schemas.account import (
    AvailabilityUpdate,
    LoginRequest,
    NursePublic,
    NurseRegister,
    NurseRegistered,
    NurseResponse,
    NurseUpdate,
    TokenResponse,
)
from homecare.services.identity_service import identity_service

router = APIRouter()


@router.get("", response_model=list[NursePublic])
async def list_nurses(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    return [NursePublic.model_validate(n) for n in await identity_service.list_nurses(db)]


@router.post("/register", response_model=NurseRegistered, status_code=201)
async def register(data: NurseRegister, db: AsyncSession = Depends(get_db)):
    nurse = await identity_service.register_nurse(db, data)
    return NurseRegistered(
        nurse=NurseResponse.model_validate(nurse),
        token=create_token(nurse.id, NURSE),
        role=NURSE,
    )


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    identity = await identity_service.authenticate(db, NURSE, body.user_name, body.password)
    return TokenResponse(access_token=create_token(identity.id, NURSE), role=NURSE)


@router.put("/me", response_model=NurseResponse)
async def update_profile(
    data: NurseUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(require_nurse),
):
    nurse = await identity_service.update_nurse(db, current_user.id, data)
    return NurseResponse.model_validate(nurse)


@router.put("/me/availability", response_model=NurseResponse)
async def update_availability(
    data: AvailabilityUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(require_nurse),
):
    slots = [slot.model_dump() for slot in data.availability]
    nurse = await identity_service.set_availability(db, current_user.id, slots)
    return NurseResponse.model_validate(nurse)
