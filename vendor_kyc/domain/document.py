"""SQLAlchemy ORM model for documents attached to a vendor application."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendor_kyc.db.base import Base
from vendor_kyc.domain.mixins import SoftDeleteMixin, utcnow


class VendorDocument(Base, SoftDeleteMixin):
    __tablename__ = "vendor_documents"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    application_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("vendor_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # "GST" | "PAN" | "Registration Certificate" | "Other"
    document_type: Mapped[str] = mapped_column(String(50), nullable=False)

    # File store reference
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(String(500), nullable=False)

    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    uploaded_by: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    application: Mapped["VendorApplication"] = relationship(back_populates="all_documents")
