import uuid
from pydantic import BaseModel

from utils.commission import Money


class CampaignBreakdown(BaseModel):
    campaign_id: uuid.UUID
    title: str
    order_count: int
    total_sales: Money
    total_commission: Money


class PayoutData(BaseModel):
    year: int
    month: int
    total_commission: Money
    campaigns: list[CampaignBreakdown]


class SalesPersonPayout(BaseModel):
    user_id: uuid.UUID
    name: str
    current_rate: Money
    total_commission: Money
    campaigns: list[CampaignBreakdown]


class TeamPayoutData(BaseModel):
    year: int
    month: int
    grand_total_commission: Money
    sales_persons: list[SalesPersonPayout]
