from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homecare.models.patient import Patient
from homecare.schemas.patient import PatientCreate


class PatientService:
    async def owned_by(self, db: AsyncSession, client_id: int) -> list[int]:
        result = await db.execute(select(Patient.id).where(Patient.owner_id == client_id))
        return list(result.scalars().all())

    async def owners_of(self, db: AsyncSession, patient_ids: Iterable[int]) -> dict[int, int]:
        """Map each existing patient id to its owner. Unknown ids are absent."""
        ids = list(patient_ids)
        if not ids:
            return {}
        result = await db.execute(select(Patient.id, Patient.owner_id).where(Patient.id.in_(ids)))
        return {pid: owner for pid, owner in result.all()}

    async def by_ids(self, db: AsyncSession, patient_ids: Iterable[int]) -> list[Patient]:
        ids = list(patient_ids)
        if not ids:
            return []
        result = await db.execute(select(Patient).where(Patient.id.in_(ids)).order_by(Patient.id))
        return list(result.scalars().all())

    async def list_for(self, db: AsyncSession, client_id: int) -> list[Patient]:
        result = await db.execute(
            select(Patient).where(Patient.owner_id == client_id).order_by(Patient.id)
        )
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, client_id: int, data: PatientCreate) -> Patient:
        patient = Patient(owner_id=client_id, **data.model_dump())
        db.add(patient)
        await db.flush()
        await db.refresh(patient)
        return patient


patient_service = PatientService()
