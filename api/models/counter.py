from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Counter(Base):
    """Last issued sequence number per key (``campaign_facebook``, ``order_FB-001``)."""
    __tablename__ = "counters"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
