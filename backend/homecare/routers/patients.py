from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from homecare.database import get_db
from homecare.auth import Identity, require_client
from homecare.schemas.patient import PatientCreate, PatientResponse
from homecare.services.patient_service import patient_service

router = APIRouter()


@router.get("", response_model=list[PatientResponse])
async def list_patients(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(require_client),
):
    patients = await patient_service.list_for(db, current_user.id)
    return [PatientResponse.model_validate(p) for p in patients]


@router.post("", response_model=PatientResponse, status_code=201)
async def create_patient(
    data: PatientCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(require_client),
):
    patient = await patient_service.create(db, current_user.id, data)
    return PatientResponse.model_validate(patient)
