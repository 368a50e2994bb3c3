"""SQLAlchemy ORM model for named monotonic counters (vendor id sequence)."""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vendor_kyc.db.base import Base


class IdCounter(Base):
    __tablename__ = "id_counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    # Last value handed out; the next caller receives value + 1
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
