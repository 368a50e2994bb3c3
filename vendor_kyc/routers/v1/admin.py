"""Reviewer console router - every endpoint requires the ``admin`` role."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_kyc.core.exceptions import ValidationError
from vendor_kyc.core.pagination import PaginationParams
from vendor_kyc.core.response import DataResponse, ListResponse, paginated
from vendor_kyc.core.security import Actor, Role, require_role
from vendor_kyc.db.base import get_db
from vendor_kyc.domain.enums import VendorStatus
from vendor_kyc.schemas.vendor import (
    StatusUpdate,
    VendorApplicationOut,
    VendorStatsOut,
    VendorSummaryOut,
)
from vendor_kyc.services.vendor import VendorService

_reviewer = require_role(Role.ADMIN)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(_reviewer)])


def _svc(session: AsyncSession) -> VendorService:
    return VendorService(session)


# The console sends "All" for an unfiltered list
_ALL_STATUSES = "all"


def _status_filter(value: Optional[str]) -> Optional[VendorStatus]:
    if value is None or value.strip().lower() in ("", _ALL_STATUSES):
        return None
    try:
        return VendorStatus(value.strip())
    except ValueError:
        allowed = ", ".join(["All", *(s.value for s in VendorStatus)])
        raise ValidationError(f"Unknown status filter '{value}'. Expected one of: {allowed}")


@router.get("/vendors", response_model=ListResponse[VendorApplicationOut])
async def list_vendors(
    filter_status: Optional[str] = Query(default=None, alias="status", description="Filter by status, or All"),
    search: Optional[str] = Query(default=None, description="Match name, contact, vendor id or email"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    """List applications (paginated), newest submission first by default."""
    items, total = await _svc(session).list_applications(
        pagination, status=_status_filter(filter_status), search=search
    )
    return paginated(
        [VendorApplicationOut.model_validate(v) for v in items],
        total, pagination.page, pagination.limit,
    )


@router.get("/vendors/{vendor_id}", response_model=DataResponse[VendorApplicationOut])
async def get_vendor(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
):
    application = await _svc(session).get_application(vendor_id)
    return {"data": VendorApplicationOut.model_validate(application)}


@router.put("/vendors/{vendor_id}/status", response_model=DataResponse[VendorApplicationOut])
async def set_vendor_status(
    vendor_id: str,
    body: StatusUpdate,
    actor: Actor = Depends(_reviewer),
    session: AsyncSession = Depends(get_db),
):
    """Approve, reject, revoke an approval, or update a rejection reason."""
    application = await _svc(session).set_status(
        vendor_id, actor, body.status, body.rejection_reason
    )
    return {"data": VendorApplicationOut.model_validate(application)}


@router.get("/stats", response_model=DataResponse[VendorStatsOut])
async def get_stats(session: AsyncSession = Depends(get_db)):
    """Counts per status plus the most recent submissions."""
    stats = await _svc(session).stats()
    stats["recent_vendors"] = [VendorSummaryOut.model_validate(v) for v in stats["recent_vendors"]]
    return {"data": VendorStatsOut.model_validate(stats)}
