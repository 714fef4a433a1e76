import uuid
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from utils.commission import Money

from api.models.campaign import CampaignStatus, CampaignType, Platform


class SalesPersonBrief(BaseModel):
    id: uuid.UUID
    name: str
    username: str

    class Config:
        from_attributes = True


class CampaignCreate(BaseModel):
    title: str = Field(min_length=1)
    platform: Platform
    type: CampaignType
    url: str = ""
    sales_person_id: uuid.UUID
    start_date: datetime | None = None


class CampaignUpdate(BaseModel):
    """
    Partial update. A field left out of the payload is not touched;
    an explicit null clears nullable fields (start_date, end_date).
    """
    title: str | None = None
    platform: Platform | None = None
    type: CampaignType | None = None
    url: str | None = None
    status: CampaignStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    # accepted only to reject reassignment explicitly
    sales_person_id: uuid.UUID | None = None


class CampaignRead(BaseModel):
    id: uuid.UUID
    reference_id: str
    title: str
    url: str
    platform: Platform
    type: CampaignType
    status: CampaignStatus
    sales_person_id: uuid.UUID
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CampaignSummary(CampaignRead):
    sales_person: SalesPersonBrief | None = None
    order_count: int = 0


class CampaignDetail(CampaignSummary):
    total_revenue: Money = Decimal("0.00")
    total_commission: Money = Decimal("0.00")
