import uuid
from datetime import date, datetime
from pydantic import BaseModel

from utils.commission import Money

from api.models.order import OrderStatus


class ProductLine(BaseModel):
    name: str
    qty: int
    base_price: float


class OrderCreate(BaseModel):
    campaign_id: uuid.UUID
    products: list[ProductLine]


class OrderUpdate(BaseModel):
    products: list[ProductLine] | None = None
    status: OrderStatus | None = None
    # accepted only to reject moving an order to another campaign
    campaign_id: uuid.UUID | None = None


class OrderFilters(BaseModel):
    campaign_id: uuid.UUID | None = None
    start_date: date | None = None
    end_date: date | None = None


class CampaignBrief(BaseModel):
    id: uuid.UUID
    reference_id: str
    title: str

    class Config:
        from_attributes = True


class OrderRead(BaseModel):
    id: uuid.UUID
    reference_id: str
    campaign_id: uuid.UUID
    products: list[ProductLine]
    order_total: Money
    snapshot_rate: Money
    commission_amount: Money
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    campaign: CampaignBrief | None = None

    class Config:
        from_attributes = True
