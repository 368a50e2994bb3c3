"""Domain package - all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  vendor.py    - VendorApplication, the onboarding record (versioned)
  document.py  - Uploaded KYC documents (soft-deleted)
  history.py   - Status history ledger (never updated or deleted)
  counter.py   - Named counters backing the VEN-NNNNN sequence
  enums.py     - VendorStatus, BusinessCategory, DocumentType
  mixins.py    - Shared TimestampMixin, SoftDeleteMixin
"""

from vendor_kyc.domain.counter import IdCounter
from vendor_kyc.domain.document import VendorDocument
from vendor_kyc.domain.enums import BusinessCategory, DocumentType, VendorStatus
from vendor_kyc.domain.history import StatusHistoryEntry
from vendor_kyc.domain.vendor import VendorApplication

__all__ = [
    "BusinessCategory",
    "DocumentType",
    "IdCounter",
    "StatusHistoryEntry",
    "VendorApplication",
    "VendorDocument",
    "VendorStatus",
]
