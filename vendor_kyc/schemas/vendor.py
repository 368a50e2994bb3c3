"""Vendor application Pydantic schemas (request DTOs and response models).

Request DTOs are allow-lists: each one names exactly the fields its operation
may change and forbids everything else, so protected fields such as
``vendorId``, ``status`` or ``statusHistory`` can never arrive via a body.
"""

from datetime import datetime

from pydantic import ConfigDict, EmailStr, Field, field_validator

from vendor_kyc.core.config import settings
from vendor_kyc.domain.enums import BusinessCategory, DocumentType
from vendor_kyc.schemas.common import CamelModel

_STRICT = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class AddressIn(CamelModel):
    model_config = _STRICT

    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    postal_code: str = Field(min_length=1, max_length=20)
    country: str = Field(default_factory=lambda: settings.default_country, min_length=1, max_length=100)

class VendorRegistration(CamelModel):
    model_config = _STRICT

    business_name: str = Field(min_length=1, max_length=255)
    business_category: BusinessCategory
    contact_person: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=50)
    address: AddressIn

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

class VendorProfileUpdate(CamelModel):
    """Owner-editable profile fields. Email is the login identity and stays fixed."""

    model_config = _STRICT

    business_name: str | None = Field(default=None, min_length=1, max_length=255)
    business_category: BusinessCategory | None = None
    contact_person: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    address: AddressIn | None = None

class StatusUpdate(CamelModel):
    model_config = _STRICT

    # Kept as a plain string so unknown values get the lifecycle's error message
    status: str
    rejection_reason: str | None = None

# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class AddressOut(CamelModel):
    street: str
    city: str
    state: str
    postal_code: str
    country: str

class DocumentOut(CamelModel):
    id: str
    document_type: DocumentType
    file_name: str
    file_url: str
    uploaded_at: datetime
    uploaded_by: str | None = None

class StatusHistoryOut(CamelModel):
    sequence: int
    status: str
    changed_by: str | None = None
    changed_at: datetime
    comment: str | None = None
    system_generated: bool

class VendorApplicationOut(CamelModel):
    vendor_id: str
    owner_user_id: str | None = None
    business_name: str
    business_category: BusinessCategory
    contact_person: str
    email: str
    phone: str
    address: AddressOut
    documents: list[DocumentOut]
    status: str
    submitted_at: datetime
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None
    status_history: list[StatusHistoryOut]
    updated_at: datetime

class VendorSummaryOut(CamelModel):
    vendor_id: str
    business_name: str
    contact_person: str
    email: str
    status: str
    submitted_at: datetime

class VendorStatsOut(CamelModel):
    total_applications: int
    pending_count: int
    approved_count: int
    rejected_count: int
    recent_vendors: list[VendorSummaryOut]
