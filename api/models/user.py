from .base import Base
import enum
import uuid
from datetime import datetime
from decimal import Decimal
from sqlalchemy import UUID, DateTime, Enum, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List


class UserRole(enum.Enum):
    ADMIN = "admin"
    SALES = "sales"


class UserStatus(enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    username: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="userrole", values_callable=lambda e: [m.value for m in e]),
        default=UserRole.SALES,
        server_default=text(f"'{UserRole.SALES.value}'"),
        nullable=False,
    )
    # Live rate in percent. Orders copy it into snapshot_rate once, at creation.
    commission_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"), nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus, name="userstatus", values_callable=lambda e: [m.value for m in e]),
        default=UserStatus.ACTIVE,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    campaigns: Mapped[List["Campaign"]] = relationship(back_populates="sales_person", passive_deletes=True)
