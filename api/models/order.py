import enum
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, UUID, DateTime, Enum, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .base import Base
from api.crud.errors import ValidationError


class OrderStatus(enum.Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reference_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    # immutable after creation
    campaign_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False, index=True)
    # [{"name": str, "qty": int, "base_price": float}]
    products: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    order_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    # frozen copy of the sales person's rate at creation, never rewritten
    snapshot_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    commission_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="orderstatus", values_callable=lambda e: [m.value for m in e]),
        default=OrderStatus.ACTIVE,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    campaign: Mapped["Campaign"] = relationship(back_populates="orders")

    @validates("campaign_id", "snapshot_rate")
    def _freeze(self, key, value):
        # __dict__ lookup so an unloaded attribute never triggers IO
        current = self.__dict__.get(key)
        if current is not None and current != value:
            raise ValidationError(f"{key} is immutable and cannot be changed after creation")
        return value
