"""Pydantic schemas package.

Folder intent:
  common.py   - CamelModel base + HealthResponse (all schemas inherit CamelModel)
  vendor.py   - Registration / profile / status request DTOs and application responses
"""
