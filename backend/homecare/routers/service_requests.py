from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from homecare.database import get_db
from homecare.auth import Identity, get_current_user
from homecare.schemas.service_request import (
    PaymentStatus,
    ServiceReportCreate,
    ServiceRequestComplete,
    ServiceRequestCreate,
    ServiceRequestDetail,
    ServiceRequestRespond,
    ServiceRequestResponse,
)
from homecare.services.service_request_service import service_requests

router = APIRouter()


@router.post("", response_model=ServiceRequestResponse, status_code=201)
async def create_service_request(
    data: ServiceRequestCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    request = await service_requests.create(db, current_user, data)
    return ServiceRequestResponse.model_validate(request)


@router.get("", response_model=list[ServiceRequestResponse])
async def list_service_requests(
    state: Optional[str] = Query(None, description="Only requests in this state"),
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    requests = await service_requests.list_for(db, current_user, state)
    return [ServiceRequestResponse.model_validate(r) for r in requests]


@router.get("/{request_id}", response_model=ServiceRequestDetail)
async def get_service_request(
    request_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    return await service_requests.detail(db, current_user, request_id)


@router.get("/{request_id}/payment-status", response_model=PaymentStatus)
async def get_payment_status(
    request_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    request = await service_requests.get(db, current_user, request_id)
    return PaymentStatus.model_validate(request)


@router.put("/{request_id}", response_model=ServiceRequestResponse)
async def respond_to_service_request(
    request_id: int,
    body: ServiceRequestRespond,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    request = await service_requests.respond(db, current_user, request_id, body.state)
    return ServiceRequestResponse.model_validate(request)


@router.put("/{request_id}/payment", response_model=ServiceRequestResponse)
async def collect_payment(
    request_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    request = await service_requests.collect_payment(db, current_user, request_id)
    return ServiceRequestResponse.model_validate(request)


@router.put("/{request_id}/complete", response_model=ServiceRequestResponse)
async def complete_service_request(
    request_id: int,
    body: ServiceRequestComplete,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    request = await service_requests.complete(db, current_user, request_id, body.service_notes)
    return ServiceRequestResponse.model_validate(request)


@router.put("/{request_id}/report", response_model=ServiceRequestResponse)
async def file_report(
    request_id: int,
    body: ServiceReportCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Identity = Depends(get_current_user),
):
    request = await service_requests.file_report(
        db, current_user, request_id, body.observations, body.recommendations
    )
    return ServiceRequestResponse.model_validate(request)
