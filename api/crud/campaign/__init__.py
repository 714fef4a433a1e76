import logging
import uuid
from datetime import datetime
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .interface import CampaignInterface
from .schema import CampaignCreate, CampaignDetail, CampaignSummary, CampaignUpdate
from api.crud.counter import CounterService
from api.crud.errors import ForbiddenError, NotFoundError, ValidationError, commit_or_raise
from api.crud.user.schema import Actor
from api.models.campaign import Campaign, CampaignStatus
from api.models.order import Order, OrderStatus
from api.models.user import User, UserRole
from utils.commission import round_money

# columns that cannot be set to NULL through an update
_REQUIRED_FIELDS = ("title", "platform", "type", "url", "status")


class CampaignService(CampaignInterface):
    def __init__(self, session: AsyncSession, counters: CounterService | None = None):
        self.session = session
        self.counters = counters or CounterService(session)

    async def _load(self, campaign_id: uuid.UUID) -> Campaign:
        res = await self.session.execute(
            select(Campaign)
            .where(Campaign.id == campaign_id)
            .options(selectinload(Campaign.sales_person))
            .execution_options(populate_existing=True)
        )
        campaign = res.scalar_one_or_none()
        if not campaign:
            raise NotFoundError("Campaign not found")
        return campaign

    async def create_campaign(self, dto: CampaignCreate) -> Campaign:
        sales_person = await self.session.get(User, dto.sales_person_id)
        if not sales_person:
            raise ValidationError("Sales person not found")
        if sales_person.role != UserRole.SALES:
            raise ValidationError("Campaign must be assigned to a user with sales role")

        # номер и кампания коммитятся вместе
        reference_id = await self.counters.generate_campaign_reference_id(dto.platform, commit=False)

        campaign = Campaign(
            reference_id=reference_id,
            title=dto.title,
            url=dto.url,
            platform=dto.platform,
            type=dto.type,
            status=CampaignStatus.ACTIVE,
            sales_person_id=dto.sales_person_id,
            start_date=dto.start_date,
        )
        self.session.add(campaign)
        await commit_or_raise(self.session, f"create campaign {reference_id}")
        logging.info(f"Created campaign {reference_id} for sales person {dto.sales_person_id}")
        return await self._load(campaign.id)

    async def get_campaign(self, campaign_id: uuid.UUID, actor: Actor) -> CampaignDetail:
        """
        Campaign with stats over its active orders only.
        """
        campaign = await self._load(campaign_id)
        if not actor.is_admin and campaign.sales_person_id != actor.user_id:
            raise ForbiddenError("Access denied to this campaign")

        stats = await self.session.execute(
            select(
                func.count(Order.id),
                func.coalesce(func.sum(Order.order_total), 0),
                func.coalesce(func.sum(Order.commission_amount), 0),
            ).where(Order.campaign_id == campaign_id, Order.status == OrderStatus.ACTIVE)
        )
        order_count, total_revenue, total_commission = stats.one()

        detail = CampaignDetail.model_validate(campaign)
        detail.order_count = order_count
        detail.total_revenue = round_money(total_revenue)
        detail.total_commission = round_money(total_commission)
        return detail

    async def list_campaigns(self, actor: Actor) -> list[CampaignSummary]:
        order_counts = (
            select(Order.campaign_id, func.count(Order.id).label("order_count"))
            .group_by(Order.campaign_id)
            .subquery()
        )
        query = (
            select(Campaign, func.coalesce(order_counts.c.order_count, 0))
            .outerjoin(order_counts, order_counts.c.campaign_id == Campaign.id)
            .options(selectinload(Campaign.sales_person))
            .order_by(Campaign.created_at.desc())
        )
        if not actor.is_admin:
            query = query.where(Campaign.sales_person_id == actor.user_id)

        res = await self.session.execute(query)
        result = []
        for campaign, order_count in res.all():
            summary = CampaignSummary.model_validate(campaign)
            summary.order_count = order_count
            result.append(summary)
        return result

    async def update_campaign(self, campaign_id: uuid.UUID, dto: CampaignUpdate) -> Campaign:
        campaign = await self._load(campaign_id)
        provided = dto.model_fields_set

        if "sales_person_id" in provided and dto.sales_person_id != campaign.sales_person_id:
            raise ValidationError("sales_person_id is immutable and cannot be changed after creation")

        changes = dto.model_dump(exclude_unset=True, exclude={"sales_person_id"})
        for field in _REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                del changes[field]

        new_status = changes.get("status")
        if new_status == CampaignStatus.COMPLETED and campaign.end_date is None and "end_date" not in changes:
            changes["end_date"] = datetime.now()
        if new_status == CampaignStatus.ACTIVE and campaign.status == CampaignStatus.COMPLETED:
            changes["end_date"] = None

        for field, value in changes.items():
            setattr(campaign, field, value)

        await commit_or_raise(self.session, f"update campaign {campaign.reference_id}")
        return await self._load(campaign_id)

    async def delete_campaign(self, campaign_id: uuid.UUID) -> dict[str, str]:
        campaign = await self._load(campaign_id)

        result = await self.session.execute(delete(Order).where(Order.campaign_id == campaign_id))
        await self.session.delete(campaign)
        await commit_or_raise(self.session, f"delete campaign {campaign.reference_id}")
        logging.info(f"Deleted campaign {campaign.reference_id} with {result.rowcount} orders")
        return {"message": "Campaign and associated orders deleted successfully"}
