import uuid
from decimal import Decimal

import pytest

from api.crud.errors import ConflictError, NotFoundError, ValidationError
from api.crud.user import UserService
from api.crud.user.schema import UserCreate, UserUpdate
from api.models import UserRole, UserStatus
from conftest import make_user


async def test_sales_user_requires_rate(session):
    with pytest.raises(ValidationError, match="required"):
        await UserService(session).create_user(UserCreate(name="Dan", username="dan"))


@pytest.mark.parametrize("rate", ["-0.01", "100.01", "250"])
async def test_rate_out_of_range(session, rate):
    with pytest.raises(ValidationError, match="between 0 and 100"):
        await make_user(session, "dan", rate=rate)


@pytest.mark.parametrize("rate", ["0", "100", "12.5"])
async def test_rate_bounds_are_inclusive(session, rate):
    user = await make_user(session, "dan", rate=rate)
    assert user.commission_rate == Decimal(rate)
    assert user.status == UserStatus.ACTIVE


async def test_admin_rate_is_zero(session):
    user = await make_user(session, "root", role=UserRole.ADMIN, rate="30")
    assert user.commission_rate == Decimal("0")


async def test_duplicate_username(session, seller):
    with pytest.raises(ConflictError):
        await make_user(session, "alice")


async def test_update_rate_validates_range(session, seller):
    service = UserService(session)
    with pytest.raises(ValidationError):
        await service.update_user(seller.id, UserUpdate(commission_rate=Decimal("101")))

    updated = await service.update_user(seller.id, UserUpdate(commission_rate=Decimal("20"), name="Alice B."))
    assert updated.commission_rate == Decimal("20")
    assert updated.name == "Alice B."
    assert updated.username == "alice"


async def test_list_sales_persons_skips_admins(session, admin, seller, other_seller):
    people = await UserService(session).list_sales_persons()
    assert [p.username for p in people] == ["alice", "bob"]
    assert len(await UserService(session).list_users()) == 3


async def test_delete_user_owning_campaigns_is_refused(session, seller, campaign):
    with pytest.raises(ConflictError, match="owns 1 campaign"):
        await UserService(session).delete_user(seller.id)


async def test_delete_user(session, other_seller):
    service = UserService(session)
    assert await service.delete_user(other_seller.id) == {"message": "User deleted successfully"}
    with pytest.raises(NotFoundError):
        await service.get_user(other_seller.id)


async def test_unknown_user(session):
    with pytest.raises(NotFoundError):
        await UserService(session).get_user(uuid.uuid4())
