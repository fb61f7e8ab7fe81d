from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from homecare.database import get_db
from homecare.auth import Identity, get_current_user
from homecare.schemas.message import MessageCreate, MessageResponse
from homecare.services.message_service import message_service

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=201)
async def send_message(
    data: MessageCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    message = await message_service.send(db, current_user, data.service_request_id, data.content)
    return MessageResponse.model_validate(message)


@router.get("/{service_request_id}", response_model=list[MessageResponse])
async def get_history(
    service_request_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    messages = await message_service.history(db, current_user, service_request_id)
    return [MessageResponse.model_validate(m) for m in messages]
