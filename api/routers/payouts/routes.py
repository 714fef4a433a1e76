from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.database import get_session
from api.crud.user.schema import Actor
from api.security import get_current_actor, require_admin
from .service import PayoutService
from .schemas import PayoutData, TeamPayoutData

router = APIRouter()

def get_payout_service(session: AsyncSession = Depends(get_session)) -> PayoutService:
    return PayoutService(session)

@router.get("/me", response_model=PayoutData, summary="Комиссия текущего продавца за месяц")
async def get_my_payout(
    year: int = Query(..., description="Год"),
    month: int = Query(..., description="Месяц, 1-12"),
    actor: Actor = Depends(get_current_actor),
    service: PayoutService = Depends(get_payout_service)
):
    return await service.get_my_payout(actor.user_id, year, month)

@router.get("/team", response_model=TeamPayoutData, summary="Комиссии всей команды за месяц")
async def get_team_payout(
    year: int = Query(..., description="Год"),
    month: int = Query(..., description="Месяц, 1-12"),
    _: Actor = Depends(require_admin),
    service: PayoutService = Depends(get_payout_service)
):
    return await service.get_team_payout(year, month)
