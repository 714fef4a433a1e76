import logging
import uuid
from datetime import datetime, time
from typing import Any
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .interface import OrderInterface
from .schema import OrderCreate, OrderFilters, OrderUpdate
from api.crud.counter import CounterService
from api.crud.errors import ForbiddenError, NotFoundError, ValidationError, commit_or_raise
from api.crud.user.schema import Actor
from api.models.campaign import Campaign
from api.models.order import Order, OrderStatus
from utils.commission import calculate_commission, calculate_order_total, validate_products


def _reprice(order: Order, products: list[dict[str, Any]]) -> None:
    """
    Recomputes totals of an existing order from its own snapshot_rate.
    Takes the order only, so the live rate of the sales person is out of reach here.
    """
    order_total = calculate_order_total(products)
    commission_amount = calculate_commission(order_total, order.snapshot_rate)
    order.products = products
    order.order_total = order_total
    order.commission_amount = commission_amount


class OrderService(OrderInterface):
    """
    Orders with commission snapshot.

    On create the sales person's current commission_rate is copied into
    snapshot_rate. Every later recalculation uses that stored value, even if
    the sales person's rate has changed since.
    """

    def __init__(self, session: AsyncSession, counters: CounterService | None = None):
        self.session = session
        self.counters = counters or CounterService(session)

    async def _load(self, order_id: uuid.UUID) -> Order:
        res = await self.session.execute(
            select(Order)
            .where(Order.id == order_id)
            .options(selectinload(Order.campaign))
            .execution_options(populate_existing=True)
        )
        order = res.scalar_one_or_none()
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def _check_access(campaign: Campaign, actor: Actor, message: str) -> None:
        if not actor.is_admin and campaign.sales_person_id != actor.user_id:
            raise ForbiddenError(message)

    async def create_order(self, dto: OrderCreate, actor: Actor) -> Order:
        products = validate_products(dto.products)

        res = await self.session.execute(
            select(Campaign)
            .where(Campaign.id == dto.campaign_id)
            .options(selectinload(Campaign.sales_person))
            .execution_options(populate_existing=True)
        )
        campaign = res.scalar_one_or_none()
        if not campaign:
            raise NotFoundError("Campaign not found")

        self._check_access(campaign, actor, "Cannot create orders for campaigns assigned to other sales persons")

        order_total = calculate_order_total(products)
        # единственное чтение живой ставки за всю жизнь заказа
        snapshot_rate = campaign.sales_person.commission_rate
        commission_amount = calculate_commission(order_total, snapshot_rate)

        # the counter bump and the order are committed together
        reference_id = await self.counters.generate_order_reference_id(campaign.reference_id, commit=False)

        order = Order(
            reference_id=reference_id,
            campaign_id=campaign.id,
            products=products,
            order_total=order_total,
            snapshot_rate=snapshot_rate,
            commission_amount=commission_amount,
            status=OrderStatus.ACTIVE,
        )
        self.session.add(order)
        await commit_or_raise(self.session, f"create order {reference_id}")
        logging.info(
            f"Created order {reference_id}: total {order_total}, rate {snapshot_rate}%, commission {commission_amount}"
        )
        return await self._load(order.id)

    async def get_order(self, order_id: uuid.UUID, actor: Actor) -> Order:
        order = await self._load(order_id)
        self._check_access(order.campaign, actor, "Access denied to this order")
        return order

    async def list_orders(self, actor: Actor, filters: OrderFilters | None = None) -> list[Order]:
        filters = filters or OrderFilters()
        query = select(Order).join(Campaign, Order.campaign_id == Campaign.id).options(selectinload(Order.campaign))

        if not actor.is_admin:
            query = query.where(Campaign.sales_person_id == actor.user_id)
        if filters.campaign_id:
            query = query.where(Order.campaign_id == filters.campaign_id)
        if filters.start_date:
            query = query.where(Order.created_at >= datetime.combine(filters.start_date, time.min))
        if filters.end_date:
            # включительно до 23:59:59.999
            end = datetime.combine(filters.end_date, time(23, 59, 59, 999000))
            query = query.where(Order.created_at <= end)

        res = await self.session.execute(query.order_by(Order.created_at.desc()))
        return list(res.scalars().all())

    async def update_order(self, order_id: uuid.UUID, dto: OrderUpdate, actor: Actor) -> Order:
        order = await self._load(order_id)
        self._check_access(order.campaign, actor, "Access denied to this order")

        if "campaign_id" in dto.model_fields_set and dto.campaign_id != order.campaign_id:
            raise ValidationError("campaign_id is immutable and cannot be changed after creation")

        if dto.products is not None:
            _reprice(order, validate_products(dto.products))

        if dto.status is not None:
            order.status = dto.status

        await commit_or_raise(self.session, f"update order {order.reference_id}")
        logging.info(f"Updated order {order.reference_id}: total {order.order_total}, commission {order.commission_amount}")
        return await self._load(order_id)

    async def delete_order(self, order_id: uuid.UUID, actor: Actor) -> dict[str, str]:
        order = await self._load(order_id)
        self._check_access(order.campaign, actor, "Access denied to this order")

        reference_id = order.reference_id
        await self.session.delete(order)
        await commit_or_raise(self.session, f"delete order {reference_id}")
        logging.info(f"Deleted order {reference_id}")
        return {"message": "Order deleted successfully"}
