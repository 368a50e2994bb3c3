"""SQLAlchemy ORM model for vendor applications.

One row per vendor onboarding application. Documents and the status history
ledger hang off it as child rows and are always loaded with the parent
(``lazy="selectin"``) so the full record can be returned after every write.

The ``version`` column is the optimistic-concurrency token: every UPDATE is
issued as ``... WHERE id = :id AND version = :seen`` and a concurrent writer
surfaces as ``StaleDataError`` (handled by ``run_atomic``).
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendor_kyc.db.base import Base
from vendor_kyc.domain.enums import VendorStatus
from vendor_kyc.domain.mixins import TimestampMixin, utcnow


class VendorApplication(Base, TimestampMixin):
    __tablename__ = "vendor_applications"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    # Public sequential identifier, e.g. VEN-00042
    vendor_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    # Assigned when the registered email first signs in
    owner_user_id: Mapped[Optional[str]] = mapped_column(String(64), index=True, nullable=True)

    business_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    business_category: Mapped[str] = mapped_column(String(50), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    address_street: Mapped[str] = mapped_column(String(255), nullable=False)
    address_city: Mapped[str] = mapped_column(String(100), nullable=False)
    address_state: Mapped[str] = mapped_column(String(100), nullable=False)
    address_postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    address_country: Mapped[str] = mapped_column(String(100), nullable=False)

    # "Pending" | "Approved" | "Rejected"
    status: Mapped[str] = mapped_column(
        String(20), default=VendorStatus.PENDING.value, nullable=False, index=True
    )
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewed_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    rejection_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False)

    all_documents: Mapped[List["VendorDocument"]] = relationship(
        back_populates="application",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="VendorDocument.uploaded_at",
    )
    status_history: Mapped[List["StatusHistoryEntry"]] = relationship(
        back_populates="application",
        lazy="selectin",
        cascade="save-update, merge",
        order_by="StatusHistoryEntry.sequence",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def documents(self) -> list["VendorDocument"]:
        """Documents that have not been removed, in upload order."""
        return [doc for doc in self.all_documents if doc.deleted_at is None]

    @property
    def address(self) -> dict[str, str]:
        return {
            "street": self.address_street,
            "city": self.address_city,
            "state": self.address_state,
            "postal_code": self.address_postal_code,
            "country": self.address_country,
        }

    def set_address(self, street: str, city: str, state: str, postal_code: str, country: str) -> None:
        self.address_street = street
        self.address_city = city
        self.address_state = state
        self.address_postal_code = postal_code
        self.address_country = country

    def touch(self) -> None:
        """Mark the row dirty so the version check runs even for child-only changes."""
        self.updated_at = utcnow()
