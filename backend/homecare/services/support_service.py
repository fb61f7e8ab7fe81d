import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homecare.auth import Identity
from homecare.models.support import FAQ, SupportRequest
from homecare.schemas.support import SupportRequestCreate

logger = logging.getLogger(__name__)


class SupportService:
    async def list_faqs(self, db: AsyncSession) -> list[FAQ]:
        result = await db.execute(select(FAQ).order_by(FAQ.id))
        return list(result.scalars().all())

    async def open_request(self, db: AsyncSession, identity: Identity, data: SupportRequestCreate) -> SupportRequest:
        support_request = SupportRequest(
            requester_id=identity.id,
            requester_role=identity.role,
            subject=data.subject,
            message=data.message,
            status="open",
        )
        db.add(support_request)
        await db.flush()
        await db.refresh(support_request)
        logger.info("Support request %s opened by %s %s", support_request.id, identity.role, identity.id)
        return support_request


support_service = SupportService()
