import logging
import uuid
from decimal import Decimal
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .interface import UserInterface
from .schema import UserCreate, UserUpdate
from api.crud.errors import ConflictError, NotFoundError, ValidationError, commit_or_raise
from api.models.campaign import Campaign
from api.models.user import User, UserRole


def _check_rate(rate: Decimal) -> None:
    if rate < 0 or rate > 100:
        raise ValidationError("Commission rate must be between 0 and 100")


class UserService(UserInterface):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, dto: UserCreate) -> User:
        if dto.role == UserRole.SALES:
            if dto.commission_rate is None:
                raise ValidationError("Commission rate is required for sales role")
            _check_rate(dto.commission_rate)

        exists = await self.session.scalar(select(User).where(User.username == dto.username))
        if exists:
            raise ConflictError("Username already exists")

        user = User(
            name=dto.name,
            username=dto.username,
            role=dto.role,
            # у админа ставки нет
            commission_rate=dto.commission_rate if dto.role == UserRole.SALES else Decimal("0"),
        )
        self.session.add(user)
        await commit_or_raise(self.session, f"create user {dto.username}")
        await self.session.refresh(user)
        logging.info(f"Created {user.role.value} user {user.username} ({user.id})")
        return user

    async def get_user(self, user_id: uuid.UUID) -> User:
        user = await self.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def list_users(self) -> list[User]:
        res = await self.session.execute(select(User).order_by(User.created_at.desc()))
        return list(res.scalars().all())

    async def list_sales_persons(self) -> list[User]:
        res = await self.session.execute(
            select(User).where(User.role == UserRole.SALES).order_by(User.name, User.id)
        )
        return list(res.scalars().all())

    async def update_user(self, user_id: uuid.UUID, dto: UserUpdate) -> User:
        """
        Changing commission_rate only affects orders created afterwards;
        existing orders keep their snapshot_rate.
        """
        user = await self.get_user(user_id)
        changes = dto.model_dump(exclude_unset=True, exclude_none=True)

        if "commission_rate" in changes:
            _check_rate(changes["commission_rate"])

        for field, value in changes.items():
            setattr(user, field, value)

        await commit_or_raise(self.session, f"update user {user_id}")
        await self.session.refresh(user)
        return user

    async def delete_user(self, user_id: uuid.UUID) -> dict[str, str]:
        user = await self.get_user(user_id)

        owned = await self.session.scalar(
            select(func.count()).select_from(Campaign).where(Campaign.sales_person_id == user_id)
        )
        if owned:
            # кампании не переназначаются, а история заказов должна остаться
            raise ConflictError(f"User owns {owned} campaign(s) and cannot be deleted")

        await self.session.delete(user)
        await commit_or_raise(self.session, f"delete user {user_id}")
        logging.info(f"Deleted user {user_id}")
        return {"message": "User deleted successfully"}
