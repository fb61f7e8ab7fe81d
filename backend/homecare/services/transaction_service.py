import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homecare.auth import Identity
from homecare.exceptions import Forbidden, NotFound
from homecare.models.service_request import ServiceRequest
from homecare.models.transaction import Transaction
from homecare.schemas.transaction import Invoice

logger = logging.getLogger(__name__)

INVOICE_DETAILS = "In-home nursing service"


class TransactionService:
    async def record(self, db: AsyncSession, service_request: ServiceRequest, amount: float) -> Transaction:
        """
        Persist the payment collected for ``service_request``. Must run in the
        same database transaction that set ``payment_collected``.
        """
        transaction = Transaction(
            service_request_id=service_request.id,
            client_id=service_request.client_id,
            nurse_id=service_request.nurse_id,
            amount=amount,
            status="paid",
        )
        db.add(transaction)
        await db.flush()
        await db.refresh(transaction)
        logger.info(
            "Recorded transaction %s for service request %s (amount %.2f)",
            transaction.id, service_request.id, amount,
        )
        return transaction

    async def list_for(self, db: AsyncSession, identity: Identity) -> list[Transaction]:
        column = Transaction.client_id if identity.is_client else Transaction.nurse_id
        result = await db.execute(
            select(Transaction)
            .where(column == identity.id)
            .order_by(Transaction.paid_at.desc(), Transaction.id.desc())
        )
        return list(result.scalars().all())

    async def invoice(self, db: AsyncSession, identity: Identity, transaction_id: int) -> Invoice:
        transaction = await db.get(Transaction, transaction_id)
        if transaction is None:
            raise NotFound("Transaction not found")
        if not (identity.is_nurse and transaction.nurse_id == identity.id):
            raise Forbidden("Access denied")
        return Invoice(
            transaction_id=transaction.id,
            service_request_id=transaction.service_request_id,
            client_id=transaction.client_id,
            nurse_id=transaction.nurse_id,
            amount=transaction.amount,
            status=transaction.status,
            paid_at=transaction.paid_at,
            issued_at=datetime.now(timezone.utc),
            details=INVOICE_DETAILS,
        )


transaction_service = TransactionService()
