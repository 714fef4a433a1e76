import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.database import get_session
from api.crud.campaign import CampaignService
from api.crud.campaign.schema import CampaignCreate, CampaignDetail, CampaignSummary, CampaignUpdate
from api.crud.user.schema import Actor, DeleteResult
from api.security import get_current_actor, require_admin

router = APIRouter()

def get_campaign_service(session: AsyncSession = Depends(get_session)) -> CampaignService:
    return CampaignService(session)

@router.get("", response_model=list[CampaignSummary], summary="Список кампаний")
async def list_campaigns(
    actor: Actor = Depends(get_current_actor),
    service: CampaignService = Depends(get_campaign_service)
):
    return await service.list_campaigns(actor)

@router.get("/{campaign_id}", response_model=CampaignDetail, summary="Кампания со статистикой")
async def get_campaign(
    campaign_id: uuid.UUID,
    actor: Actor = Depends(get_current_actor),
    service: CampaignService = Depends(get_campaign_service)
):
    return await service.get_campaign(campaign_id, actor)

@router.post("", response_model=CampaignSummary, status_code=status.HTTP_201_CREATED, summary="Создание кампании")
async def create_campaign(
    dto: CampaignCreate,
    _: Actor = Depends(require_admin),
    service: CampaignService = Depends(get_campaign_service)
):
    return await service.create_campaign(dto)

@router.put("/{campaign_id}", response_model=CampaignSummary, summary="Изменение кампании")
async def update_campaign(
    campaign_id: uuid.UUID,
    dto: CampaignUpdate,
    _: Actor = Depends(require_admin),
    service: CampaignService = Depends(get_campaign_service)
):
    return await service.update_campaign(campaign_id, dto)

@router.delete("/{campaign_id}", response_model=DeleteResult, summary="Удаление кампании вместе с заказами")
async def delete_campaign(
    campaign_id: uuid.UUID,
    _: Actor = Depends(require_admin),
    service: CampaignService = Depends(get_campaign_service)
):
    return await service.delete_campaign(campaign_id)
