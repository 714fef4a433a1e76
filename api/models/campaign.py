import enum
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import UUID, DateTime, Enum, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from .base import Base
from api.crud.errors import ValidationError


class Platform(enum.Enum):
    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"


class CampaignType(enum.Enum):
    POST = "post"
    LIVE = "live"
    EVENT = "event"


class CampaignStatus(enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


def _values(e):
    return [m.value for m in e]


class Campaign(Base):
    __tablename__ = "campaigns"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reference_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    url: Mapped[str] = mapped_column(String, nullable=False, default="")
    platform: Mapped[Platform] = mapped_column(Enum(Platform, name="platform", values_callable=_values), nullable=False)
    type: Mapped[CampaignType] = mapped_column(Enum(CampaignType, name="campaigntype", values_callable=_values), nullable=False)
    status: Mapped[CampaignStatus] = mapped_column(
        Enum(CampaignStatus, name="campaignstatus", values_callable=_values),
        default=CampaignStatus.ACTIVE,
        nullable=False,
    )
    # immutable after creation
    sales_person_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    sales_person: Mapped["User"] = relationship(back_populates="campaigns")
    orders: Mapped[List["Order"]] = relationship(
        back_populates="campaign",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @validates("sales_person_id")
    def _freeze_sales_person(self, key, value):
        current = self.__dict__.get(key)
        if current is not None and current != value:
            raise ValidationError("sales_person_id is immutable and cannot be changed after creation")
        return value
