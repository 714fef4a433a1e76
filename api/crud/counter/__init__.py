import logging
from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .interface import CounterInterface
from api.crud.errors import ConflictError, StorageError, ValidationError, commit_or_raise
from api.models.campaign import Campaign, Platform
from api.models.counter import Counter


PLATFORM_PREFIXES = {
    Platform.FACEBOOK: "FB",
    Platform.INSTAGRAM: "IG",
}


class CounterService(CounterInterface):
    """
    Atomic sequence generation for human-readable reference ids.

    Campaigns:  campaign_{platform}        -> FB-001, IG-002
    Orders:     order_{campaign reference} -> FB-001-01, FB-001-02
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _upsert_increment(self, key: str):
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            insert = pg_insert
        elif dialect == "sqlite":
            insert = sqlite_insert
        else:
            raise StorageError(f"Atomic counters are not supported on {dialect}")

        stmt = insert(Counter).values(id=key, seq=1)
        # одна атомарная операция: INSERT ... ON CONFLICT DO UPDATE ... RETURNING
        return stmt.on_conflict_do_update(
            index_elements=[Counter.id],
            set_={"seq": Counter.seq + 1},
        ).returning(Counter.seq)

    async def next_sequence(self, key: str, commit: bool = True) -> int:
        """
        Returns 1 for a fresh key, otherwise the stored value plus one.

        With ``commit=False`` the increment stays in the caller's transaction,
        so a later rollback also undoes it.
        """
        try:
            result = await self.session.execute(self._upsert_increment(key))
            seq = result.scalar_one()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logging.error(f"Counter increment failed for key {key}: {e}", exc_info=True)
            raise StorageError(f"Could not allocate sequence for {key}") from e

        if commit:
            await commit_or_raise(self.session, f"store sequence for {key}")
        return seq

    async def generate_campaign_reference_id(self, platform: Platform | str, commit: bool = True) -> str:
        try:
            platform = Platform(platform)
        except ValueError:
            raise ValidationError(f"Unknown platform: {platform}")

        seq = await self.next_sequence(f"campaign_{platform.value}", commit=commit)
        return f"{PLATFORM_PREFIXES[platform]}-{seq:03d}"

    async def generate_order_reference_id(self, campaign_reference_id: str, commit: bool = True) -> str:
        seq = await self.next_sequence(f"order_{campaign_reference_id}", commit=commit)
        return f"{campaign_reference_id}-{seq:02d}"

    async def clear_all_counters(self) -> int:
        """
        Seeding and test helper. Refused while campaigns exist: issued
        reference ids would be handed out again and collide on create.
        """
        campaigns = await self.session.scalar(select(func.count()).select_from(Campaign))
        if campaigns:
            raise ConflictError(f"Cannot clear counters while {campaigns} campaign(s) exist")

        result = await self.session.execute(delete(Counter))
        await commit_or_raise(self.session, "clear counters")
        logging.info(f"Cleared {result.rowcount} counters")
        return result.rowcount
