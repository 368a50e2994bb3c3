"""Services package - all business logic lives here, never in routers.

Files:
  vendor.py       - VendorService: registration, ownership, documents, review decisions
  lifecycle.py    - Status transition table and history ledger helpers
  identifiers.py  - VEN-NNNNN identifier formatting and allocation
  storage.py      - Local-disk document store

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
