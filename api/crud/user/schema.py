from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from utils.commission import Money
import uuid
from api.models.user import UserRole, UserStatus


class Actor(BaseModel):
    """Caller identity as resolved by the authentication layer."""
    user_id: uuid.UUID
    role: UserRole
    commission_rate: Decimal = Decimal("0")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    class Config:
        from_attributes = True


class UserSchema(BaseModel):
    id: uuid.UUID
    name: str
    username: str
    role: UserRole
    commission_rate: Money
    status: UserStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserRead(UserSchema):
    ...

    class Config:
        from_attributes = True


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    username: str = Field(min_length=1)
    role: UserRole = UserRole.SALES
    commission_rate: Decimal | None = None


class UserUpdate(BaseModel):
    name: str | None = None
    role: UserRole | None = None
    commission_rate: Decimal | None = None
    status: UserStatus | None = None


class DeleteResult(BaseModel):
    message: str
