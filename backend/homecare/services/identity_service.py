import logging
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from homecare.auth import CLIENT, NURSE, Identity, hash_password, verify_password
from homecare.exceptions import Invalid, NotFound, Unauthenticated
from homecare.models.nurse import Nurse
from homecare.models.user import User
from homecare.schemas.account import NurseRegister, NurseUpdate, UserRegister

logger = logging.getLogger(__name__)

_MODELS = {CLIENT: User, NURSE: Nurse}

Account = Union[User, Nurse]


class IdentityService:
    """Credential store for both identity classes."""

    async def by_login(self, db: AsyncSession, role: str, login: str) -> Optional[Account]:
        model = _MODELS[role]
        result = await db.execute(select(model).where(model.user_name == login))
        return result.scalar_one_or_none()

    async def authenticate(self, db: AsyncSession, role: str, login: str, password: str) -> Identity:
        account = await self.by_login(db, role, login)
        if account is None or not verify_password(password, account.password_hash):
            logger.info("Failed %s login for %r", role, login)
            raise Unauthenticated("Incorrect credentials")
        return Identity(id=account.id, role=role)

    async def _ensure_login_free(self, db: AsyncSession, role: str, login: str) -> None:
        if await self.by_login(db, role, login) is not None:
            raise Invalid(f"User name '{login}' is already taken")

    async def _insert(self, db: AsyncSession, account: Account) -> Account:
        # A concurrent registration can take the login between the check and the flush.
        db.add(account)
        try:
            await db.flush()
        except IntegrityError:
            raise Invalid(f"User name '{account.user_name}' is already taken")
        await db.refresh(account)
        return account

    async def register_client(self, db: AsyncSession, data: UserRegister) -> User:
        await self._ensure_login_free(db, CLIENT, data.user_name)
        user = User(
            name=data.name,
            user_name=data.user_name,
            password_hash=hash_password(data.password),
            photo=data.photo,
        )
        await self._insert(db, user)
        logger.info("Registered client %s", user.id)
        return user

    async def register_nurse(self, db: AsyncSession, data: NurseRegister) -> Nurse:
        await self._ensure_login_free(db, NURSE, data.user_name)
        fields = data.model_dump(exclude={"password"})
        nurse = Nurse(password_hash=hash_password(data.password), **fields)
        await self._insert(db, nurse)
        logger.info("Registered nurse %s", nurse.id)
        return nurse

    async def get_nurse(self, db: AsyncSession, nurse_id: int) -> Nurse:
        nurse = await db.get(Nurse, nurse_id)
        if nurse is None:
            raise NotFound(f"Nurse {nurse_id} not found")
        return nurse

    async def list_nurses(self, db: AsyncSession) -> list[Nurse]:
        result = await db.execute(select(Nurse).order_by(Nurse.id))
        return list(result.scalars().all())

    async def update_nurse(self, db: AsyncSession, nurse_id: int, data: NurseUpdate) -> Nurse:
        nurse = await self.get_nurse(db, nurse_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(nurse, key, value)
        await db.flush()
        await db.refresh(nurse)
        return nurse

    async def set_availability(self, db: AsyncSession, nurse_id: int, slots: list[dict]) -> Nurse:
        nurse = await self.get_nurse(db, nurse_id)
        nurse.availability = slots
        await db.flush()
        await db.refresh(nurse)
        return nurse


identity_service = IdentityService()
