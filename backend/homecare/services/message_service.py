from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homecare.auth import CLIENT, NURSE, Identity
from homecare.models.message import Message
from homecare.services.service_request_service import service_requests


class MessageService:
    """Chat between the two parties of a service request."""

    async def send(self, db: AsyncSession, identity: Identity, request_id: int, content: str) -> Message:
        request = await service_requests.get(db, identity, request_id)
        if identity.is_client:
            receiver_id, receiver_role = request.nurse_id, NURSE
        else:
            receiver_id, receiver_role = request.client_id, CLIENT

        message = Message(
            service_request_id=request.id,
            sender_id=identity.id,
            sender_role=identity.role,
            receiver_id=receiver_id,
            receiver_role=receiver_role,
            content=content,
        )
        db.add(message)
        await db.flush()
        await db.refresh(message)
        return message

    async def history(self, db: AsyncSession, identity: Identity, request_id: int) -> list[Message]:
        await service_requests.get(db, identity, request_id)
        result = await db.execute(
            select(Message)
            .where(Message.service_request_id == request_id)
            .order_by(Message.timestamp, Message.id)
        )
        return list(result.scalars().all())


message_service = MessageService()
