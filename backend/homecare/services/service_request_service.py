"""
Service request lifecycle.

    pending --accept--> accepted --complete--> completed
    pending --reject--> rejected

``payment_collected`` and ``payment_released`` are flags gated by the state,
not states of their own. Every mutation is one conditional UPDATE keyed on
the request id, the acting party and the expected current state, so two
concurrent transitions on the same request cannot both apply. The record is
only read back afterwards, either to return it or to explain a refusal.
"""

import logging
from typing import Callable, Optional

from sqlalchemy import ColumnElement, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from homecare.access import ensure_participant, is_client_of, is_nurse_of, owns_patients
from homecare.auth import Identity
from homecare.exceptions import Conflict, Forbidden, Invalid, NotFound
from homecare.models.service_request import (
    ACCEPTED,
    COMPLETED,
    PENDING,
    REJECTED,
    STATES,
    ServiceRequest,
)
from homecare.models.nurse import Nurse
from homecare.schemas.patient import PatientResponse
from homecare.schemas.service_request import ServiceRequestCreate, ServiceRequestDetail, ServiceRequestResponse
from homecare.services.identity_service import identity_service
from homecare.services.patient_service import patient_service
from homecare.services.transaction_service import transaction_service

logger = logging.getLogger(__name__)

PartyCheck = Callable[[ServiceRequest, Identity], bool]

RESPONSES = (ACCEPTED, REJECTED)


class ServiceRequestLifecycle:
    async def create(self, db: AsyncSession, identity: Identity, data: ServiceRequestCreate) -> ServiceRequest:
        if not identity.is_client:
            raise Forbidden("Only clients can create service requests")
        await identity_service.get_nurse(db, data.nurse_id)

        patient_ids = list(dict.fromkeys(data.patient_ids))
        owners = await patient_service.owners_of(db, patient_ids)
        if not owns_patients(identity, patient_ids, owners):
            raise Forbidden("Access denied to one or more selected patients")

        request = ServiceRequest(
            client_id=identity.id,
            nurse_id=data.nurse_id,
            patient_ids=patient_ids,
            details=data.details,
            scheduled_date=data.scheduled_date,
            rate=data.rate,
            state=PENDING,
            payment_collected=False,
            payment_released=False,
        )
        db.add(request)
        await db.flush()
        await db.refresh(request)
        logger.info(
            "Client %s created service request %s for nurse %s",
            identity.id, request.id, request.nurse_id,
        )
        return request

    async def _find(self, db: AsyncSession, request_id: int) -> Optional[ServiceRequest]:
        result = await db.execute(
            select(ServiceRequest)
            .where(ServiceRequest.id == request_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _load(self, db: AsyncSession, request_id: int) -> ServiceRequest:
        request = await self._find(db, request_id)
        if request is None:
            raise NotFound(f"Service request {request_id} not found")
        return request

    async def get(self, db: AsyncSession, identity: Identity, request_id: int) -> ServiceRequest:
        return ensure_participant(await self._load(db, request_id), identity)

    async def detail(self, db: AsyncSession, identity: Identity, request_id: int) -> ServiceRequestDetail:
        """Participant view of one request, with the nurse's name and the patient records."""
        request = await self.get(db, identity, request_id)
        nurse = await db.get(Nurse, request.nurse_id)
        patients = await patient_service.by_ids(db, request.patient_ids)
        return ServiceRequestDetail(
            **ServiceRequestResponse.model_validate(request).model_dump(),
            nurse_name=nurse.name if nurse is not None else None,
            patients=[PatientResponse.model_validate(p) for p in patients],
        )

    async def list_for(self, db: AsyncSession, identity: Identity, state: Optional[str] = None) -> list[ServiceRequest]:
        column = ServiceRequest.client_id if identity.is_client else ServiceRequest.nurse_id
        query = select(ServiceRequest).where(column == identity.id)
        if state:
            if state not in STATES:
                raise Invalid(f"Unknown state '{state}'")
            query = query.where(ServiceRequest.state == state)
        query = query.order_by(ServiceRequest.created_at.desc(), ServiceRequest.id.desc())
        result = await db.execute(query)
        return list(result.scalars().all())

    async def _apply(self, db: AsyncSession, request_id: int, guards: list[ColumnElement[bool]], values: dict) -> bool:
        """Conditional update; True if exactly this call changed the record."""
        stmt = (
            update(ServiceRequest)
            .where(ServiceRequest.id == request_id, *guards)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount == 1

    async def _refuse(
        self,
        db: AsyncSession,
        identity: Identity,
        request_id: int,
        party: PartyCheck,
        reason: str,
        conflict: bool = False,
    ) -> None:
        """Explain why a conditional update matched nothing, then raise."""
        request = await self._load(db, request_id)
        if not party(request, identity):
            logger.warning(
                "%s %s denied access to service request %s", identity.role, identity.id, request_id
            )
            raise Forbidden("Access denied")
        logger.warning(
            "Refused transition on service request %s (state=%s): %s", request_id, request.state, reason
        )
        if conflict:
            raise Conflict(reason)
        raise Forbidden(reason)

    async def respond(self, db: AsyncSession, identity: Identity, request_id: int, target_state: str) -> ServiceRequest:
        """Accept or reject a pending request. Only the assigned nurse may respond."""
        if target_state not in RESPONSES:
            raise Invalid("Invalid state, must be 'accepted' or 'rejected'")

        applied = identity.is_nurse and await self._apply(
            db,
            request_id,
            [ServiceRequest.nurse_id == identity.id, ServiceRequest.state == PENDING],
            {"state": target_state},
        )
        if not applied:
            await self._refuse(
                db, identity, request_id, is_nurse_of,
                "Service request is no longer pending", conflict=True,
            )

        request = await self._load(db, request_id)
        logger.info("Nurse %s %s service request %s", identity.id, target_state, request_id)
        if target_state == ACCEPTED:
            logger.info(
                "Notifying client %s: service request %s was accepted", request.client_id, request_id
            )
        return request

    async def collect_payment(self, db: AsyncSession, identity: Identity, request_id: int) -> ServiceRequest:
        """Collect payment for an accepted request, exactly once."""
        applied = identity.is_client and await self._apply(
            db,
            request_id,
            [
                ServiceRequest.client_id == identity.id,
                ServiceRequest.state == ACCEPTED,
                ServiceRequest.payment_collected.is_(False),
            ],
            {"payment_collected": True},
        )
        if not applied:
            await self._refuse(
                db, identity, request_id, is_client_of,
                "Payment can only be collected once, on an accepted service request",
            )

        request = await self._load(db, request_id)
        await transaction_service.record(db, request, request.rate)
        return request

    async def complete(self, db: AsyncSession, identity: Identity, request_id: int, service_notes: str) -> ServiceRequest:
        """Complete an accepted request. Releases the payment in the same update."""
        applied = identity.is_nurse and await self._apply(
            db,
            request_id,
            [ServiceRequest.nurse_id == identity.id, ServiceRequest.state == ACCEPTED],
            {"state": COMPLETED, "payment_released": True, "service_notes": service_notes},
        )
        if not applied:
            await self._refuse(
                db, identity, request_id, is_nurse_of,
                "Only an accepted service request can be completed",
            )

        logger.info("Nurse %s completed service request %s; payment released", identity.id, request_id)
        return await self._load(db, request_id)

    async def file_report(
        self,
        db: AsyncSession,
        identity: Identity,
        request_id: int,
        observations: str,
        recommendations: Optional[str],
    ) -> ServiceRequest:
        """Attach the report to a completed request. Re-filing overwrites it."""
        applied = identity.is_nurse and await self._apply(
            db,
            request_id,
            [ServiceRequest.nurse_id == identity.id, ServiceRequest.state == COMPLETED],
            {"observations": observations, "recommendations": recommendations},
        )
        if not applied:
            await self._refuse(
                db, identity, request_id, is_nurse_of,
                "A report can only be filed for a completed service request",
            )
        return await self._load(db, request_id)


service_requests = ServiceRequestLifecycle()
