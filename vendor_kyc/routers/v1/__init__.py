"""v1 router package - all /api/v1/* endpoints live here.

Files:
  vendors.py  - Vendor self-service: registration, claim, profile, documents
  admin.py    - Reviewer console: list, detail, status decisions, stats

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to vendor_kyc/services/.
"""
