import calendar
import uuid
from datetime import datetime
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func

from api.crud.errors import ValidationError
from api.crud.user import UserService
from api.models import Campaign, Order, OrderStatus
from utils.commission import round_money
from .schemas import CampaignBreakdown, PayoutData, SalesPersonPayout, TeamPayoutData


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    """
    [YYYY-MM-01 00:00:00, YYYY-MM-<last> 23:59:59.999], naive like created_at.
    """
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise ValidationError("Year is out of range")
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime(year, month, last_day, 23, 59, 59, 999000)


class PayoutService:
    """
    Read-only monthly rollups. Sums the stored commission_amount of active
    orders and never recalculates it.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_my_payout(self, user_id: uuid.UUID, year: int, month: int) -> PayoutData:
        start, end = month_window(year, month)

        query = (
            select(
                Campaign.id,
                Campaign.title,
                func.count(Order.id),
                func.sum(Order.order_total),
                func.sum(Order.commission_amount),
            )
            .select_from(Order)
            .join(Campaign, Order.campaign_id == Campaign.id)
            .where(
                Campaign.sales_person_id == user_id,
                Order.status == OrderStatus.ACTIVE,
                Order.created_at >= start,
                Order.created_at <= end,
            )
            .group_by(Campaign.id, Campaign.title, Campaign.reference_id)
            .order_by(Campaign.reference_id)
        )
        rows = (await self.session.execute(query)).all()

        campaigns = [
            CampaignBreakdown(
                campaign_id=campaign_id,
                title=title,
                order_count=order_count,
                total_sales=round_money(total_sales or 0),
                total_commission=round_money(total_commission or 0),
            )
            for campaign_id, title, order_count, total_sales, total_commission in rows
        ]
        total = round_money(sum((c.total_commission for c in campaigns), Decimal("0")))

        return PayoutData(year=year, month=month, total_commission=total, campaigns=campaigns)

    async def get_team_payout(self, year: int, month: int) -> TeamPayoutData:
        month_window(year, month)

        sales_persons = await UserService(self.session).list_sales_persons()

        result = []
        for person in sales_persons:
            # тот же расчёт, что и /payouts/me, чтобы цифры совпадали
            payout = await self.get_my_payout(person.id, year, month)
            result.append(
                SalesPersonPayout(
                    user_id=person.id,
                    name=person.name,
                    current_rate=person.commission_rate,
                    total_commission=payout.total_commission,
                    campaigns=payout.campaigns,
                )
            )

        grand_total = round_money(sum((p.total_commission for p in result), Decimal("0")))
        return TeamPayoutData(year=year, month=month, grand_total_commission=grand_total, sales_persons=result)
