import uuid
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from api.crud.errors import AppError, ForbiddenError, UnauthorizedError
from api.crud.user.schema import Actor
from api.database import get_session
from api.models.user import User, UserStatus
from config import ENV
env = ENV()
API_KEY = env.api_token


async def require_service_key(x_api_key: str | None = Header(None)):
    if not API_KEY:
        raise AppError("API key not configured")
    if not x_api_key or x_api_key != API_KEY:
        raise UnauthorizedError("Invalid service key")
    return True


async def get_current_actor(
    x_user_id: str | None = Header(None),
    session: AsyncSession = Depends(get_session),
) -> Actor:
    """
    Identity arrives already authenticated from the gateway as X-User-Id.
    The live commission_rate is read here only for display; orders take
    their snapshot from the campaign owner, not from the caller.
    """
    if not x_user_id:
        raise UnauthorizedError("Missing user identity")
    try:
        user_id = uuid.UUID(x_user_id)
    except ValueError:
        raise UnauthorizedError("Malformed user identity")

    user = await session.get(User, user_id)
    if not user:
        raise UnauthorizedError("Unknown user")
    if user.status != UserStatus.ACTIVE:
        raise UnauthorizedError("User is inactive")

    return Actor(user_id=user.id, role=user.role, commission_rate=user.commission_rate)


async def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_admin:
        raise ForbiddenError("Admin access required")
    return actor
