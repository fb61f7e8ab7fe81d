from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from homecare.database import get_db
from homecare.auth import Identity, get_current_user
from homecare.schemas.transaction import Invoice, TransactionResponse
from homecare.services.transaction_service import transaction_service

router = APIRouter()


@router.get("", response_model=list[TransactionResponse])
async def list_transactions(
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    transactions = await transaction_service.list_for(db, current_user)
    return [TransactionResponse.model_validate(t) for t in transactions]


@router.post("/{transaction_id}/invoice", response_model=Invoice)
async def generate_invoice(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    return await transaction_service.invoice(db, current_user, transaction_id)
