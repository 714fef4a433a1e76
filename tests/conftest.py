import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./campaigns-test.db")
os.environ.setdefault("API_TOKEN", "test-token")

from datetime import datetime
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.app import FastAPIManager
from api.crud.campaign import CampaignService
from api.crud.campaign.schema import CampaignCreate
from api.crud.user import UserService
from api.crud.user.schema import Actor, UserCreate
from api.database import build_engine, get_session, init_models
from api.models import CampaignType, Order, Platform, UserRole

API_TOKEN = os.environ["API_TOKEN"]


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


async def make_user(session, username: str, role: UserRole = UserRole.SALES, rate: str | None = "10"):
    dto = UserCreate(
        name=username.title(),
        username=username,
        role=role,
        commission_rate=Decimal(rate) if rate is not None else None,
    )
    return await UserService(session).create_user(dto)


async def make_campaign(session, sales_person_id, platform: Platform = Platform.FACEBOOK, title: str = "Spring drop"):
    dto = CampaignCreate(
        title=title,
        platform=platform,
        type=CampaignType.POST,
        url="https://example.com/post/1",
        sales_person_id=sales_person_id,
    )
    return await CampaignService(session).create_campaign(dto)


async def set_created_at(session, order_id, when: datetime) -> None:
    await session.execute(update(Order).where(Order.id == order_id).values(created_at=when))
    await session.commit()


def actor_for(user) -> Actor:
    return Actor(user_id=user.id, role=user.role, commission_rate=user.commission_rate)


# Seed fixtures use their own short-lived sessions: with BEGIN IMMEDIATE an idle
# open transaction would block every other connection to the test database.
@pytest.fixture
async def admin(session_maker):
    async with session_maker() as s:
        return await make_user(s, "admin", role=UserRole.ADMIN, rate=None)


@pytest.fixture
async def seller(session_maker):
    async with session_maker() as s:
        return await make_user(s, "alice", rate="10")


@pytest.fixture
async def other_seller(session_maker):
    async with session_maker() as s:
        return await make_user(s, "bob", rate="15")


@pytest.fixture
async def campaign(session_maker, seller):
    async with session_maker() as s:
        return await make_campaign(s, seller.id)


@pytest.fixture
async def client(engine, session_maker):
    app = FastAPIManager().get_app()

    async def override_session():
        async with session_maker() as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def headers_for(user) -> dict[str, str]:
    return {"X-API-Key": API_TOKEN, "X-User-Id": str(user.id)}
