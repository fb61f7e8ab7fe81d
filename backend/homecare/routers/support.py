from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from homecare.database import get_db
from homecare.auth import Identity, get_current_user
from homecare.schemas.support import FAQResponse, SupportRequestCreate, SupportRequestResponse
from homecare.services.support_service import support_service

router = APIRouter()


@router.get("/faq", response_model=list[FAQResponse])
async def list_faqs(db: AsyncSession = Depends(get_db)):
    return [FAQResponse.model_validate(f) for f in await support_service.list_faqs(db)]


@router.post("/request", response_model=SupportRequestResponse, status_code=201)
async def open_support_request(
    data: SupportRequestCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    support_request = await support_service.open_request(db, current_user, data)
    return SupportRequestResponse.model_validate(support_request)
