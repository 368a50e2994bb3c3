"""Vendor self-service router.

Registration is public. Everything else requires a bearer token with the
``vendor`` role; the service re-checks that the caller owns the application
it is changing.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_kyc.core.config import settings
from vendor_kyc.core.exceptions import AppException, ValidationError
from vendor_kyc.core.response import DataResponse
from vendor_kyc.core.security import Actor, Role, require_role
from vendor_kyc.db.base import get_db
from vendor_kyc.domain.enums import DocumentType
from vendor_kyc.schemas.vendor import (
    VendorApplicationOut,
    VendorProfileUpdate,
    VendorRegistration,
)
from vendor_kyc.services.storage import DocumentStorage, get_document_storage
from vendor_kyc.services.vendor import VendorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vendors", tags=["Vendors"])

_vendor_actor = require_role(Role.VENDOR)

_ALLOWED_CONTENT_TYPES = {"application/pdf", "image/jpeg", "image/png"}
_ALLOWED_EXTENSIONS = {".pdf", ".jpg", ".jpeg", ".png"}


# ------------------------------------------------------------------
# Helpers - service factory and upload validation (HTTP concerns)
# ------------------------------------------------------------------

def _svc(session: AsyncSession) -> VendorService:
    return VendorService(session)


async def _validate_and_read_file(file: UploadFile) -> bytes:
    """Check type and size of an uploaded document and return its bytes."""
    filename = (file.filename or "").lower()
    has_ext = any(filename.endswith(ext) for ext in _ALLOWED_EXTENSIONS)
    if file.content_type not in _ALLOWED_CONTENT_TYPES and not has_ext:
        accepted = ", ".join(sorted(_ALLOWED_EXTENSIONS))
        raise AppException(
            f"Unsupported file type '{file.content_type}'. Accepted formats: {accepted}",
            status_code=415,
            code="UNSUPPORTED_MEDIA_TYPE",
        )

    contents = await file.read()
    if len(contents) == 0:
        raise ValidationError("Uploaded file is empty.")
    if len(contents) > settings.max_upload_size_bytes:
        raise AppException(
            f"File size exceeds the {settings.max_upload_size_mb}MB limit.",
            status_code=413,
            code="FILE_TOO_LARGE",
        )
    return contents


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post(
    "/register",
    response_model=DataResponse[VendorApplicationOut],
    status_code=status.HTTP_201_CREATED,
)
async def register_vendor(
    body: VendorRegistration,
    session: AsyncSession = Depends(get_db),
):
    """Submit a new vendor application. The vendor can sign in with this email afterwards."""
    application = await _svc(session).create_application(body)
    return {"data": VendorApplicationOut.model_validate(application)}


@router.post("/claim", response_model=DataResponse[VendorApplicationOut])
async def claim_application(
    actor: Actor = Depends(_vendor_actor),
    session: AsyncSession = Depends(get_db),
):
    """Link the signed-in vendor account to the application registered under its email."""
    application = await _svc(session).claim_application(actor)
    return {"data": VendorApplicationOut.model_validate(application)}


@router.get("/me", response_model=DataResponse[VendorApplicationOut])
async def get_my_application(
    actor: Actor = Depends(_vendor_actor),
    session: AsyncSession = Depends(get_db),
):
    application = await _svc(session).get_for_owner(actor)
    return {"data": VendorApplicationOut.model_validate(application)}


@router.put("/{vendor_id}", response_model=DataResponse[VendorApplicationOut])
async def update_profile(
    vendor_id: str,
    body: VendorProfileUpdate,
    actor: Actor = Depends(_vendor_actor),
    session: AsyncSession = Depends(get_db),
):
    application = await _svc(session).update_profile(vendor_id, actor, body)
    return {"data": VendorApplicationOut.model_validate(application)}


@router.post(
    "/{vendor_id}/documents",
    response_model=DataResponse[VendorApplicationOut],
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    vendor_id: str,
    document_type: DocumentType = Form(..., alias="documentType"),
    file: UploadFile = File(...),
    actor: Actor = Depends(_vendor_actor),
    session: AsyncSession = Depends(get_db),
    storage: DocumentStorage = Depends(get_document_storage),
):
    """Upload a KYC document. A rejected application is resubmitted for review."""
    contents = await _validate_and_read_file(file)
    stored = await storage.save(contents, file.filename or "document")
    try:
        application = await _svc(session).add_document(
            vendor_id, actor, document_type, stored.file_name, stored.file_url
        )
    except Exception:
        await storage.discard(stored)
        raise
    return {"data": VendorApplicationOut.model_validate(application)}


@router.delete("/{vendor_id}/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    vendor_id: str,
    document_id: str,
    actor: Actor = Depends(_vendor_actor),
    session: AsyncSession = Depends(get_db),
):
    await _svc(session).remove_document(vendor_id, actor, document_id)
