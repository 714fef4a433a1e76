import uuid
from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.database import get_session
from api.crud.order import OrderService
from api.crud.order.schema import OrderCreate, OrderFilters, OrderRead, OrderUpdate
from api.crud.user.schema import Actor, DeleteResult
from api.security import get_current_actor

router = APIRouter()

def get_order_service(session: AsyncSession = Depends(get_session)) -> OrderService:
    return OrderService(session)

@router.get("", response_model=list[OrderRead], summary="Список заказов")
async def list_orders(
    campaign_id: uuid.UUID | None = Query(None, description="Фильтр по кампании"),
    start_date: date | None = Query(None, description="С даты (включительно)"),
    end_date: date | None = Query(None, description="По дату (включительно)"),
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service)
):
    filters = OrderFilters(campaign_id=campaign_id, start_date=start_date, end_date=end_date)
    return await service.list_orders(actor, filters)

@router.get("/{order_id}", response_model=OrderRead, summary="Получение заказа")
async def get_order(
    order_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service)
):
    return await service.get_order(order_id, actor)

@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED, summary="Создание заказа со снимком ставки")
async def create_order(
    dto: OrderCreate,
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service)
):
    return await service.create_order(dto, actor)

@router.put("/{order_id}", response_model=OrderRead, summary="Изменение заказа (комиссия по исходной ставке)")
async def update_order(
    order_id: uuid.UUID,
    dto: OrderUpdate,
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service)
):
    return await service.update_order(order_id, dto, actor)

@router.delete("/{order_id}", response_model=DeleteResult, summary="Удаление заказа")
async def delete_order(
    order_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service)
):
    return await service.delete_order(order_id, actor)
