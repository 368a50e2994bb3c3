"""SQLAlchemy ORM model for the per-application status history ledger.

Rows are immutable once written (no updated_at / deleted_at). Mapper events
below refuse any UPDATE or DELETE of an existing entry, and the unique
``(application_id, sequence)`` pair makes two concurrent appends at the same
position collide instead of interleaving.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    event,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendor_kyc.core.exceptions import ImmutableRecordError
from vendor_kyc.db.base import Base
from vendor_kyc.domain.mixins import utcnow


class StatusHistoryEntry(Base):
    __tablename__ = "vendor_status_history"
    __table_args__ = (
        UniqueConstraint("application_id", "sequence", name="uq_status_history_position"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    application_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("vendor_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # 0 for the registration entry, then 1, 2, ...
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[str] = mapped_column(String(20), nullable=False)
    changed_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # True for entries written by the system (registration, resubmission)
    system_generated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    application: Mapped["VendorApplication"] = relationship(back_populates="status_history")


@event.listens_for(StatusHistoryEntry, "before_update")
def _refuse_update(mapper, connection, target: StatusHistoryEntry) -> None:
    raise ImmutableRecordError(f"Status history entry {target.id} cannot be modified")


@event.listens_for(StatusHistoryEntry, "before_delete")
def _refuse_delete(mapper, connection, target: StatusHistoryEntry) -> None:
    raise ImmutableRecordError(f"Status history entry {target.id} cannot be removed")
