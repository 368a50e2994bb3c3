"""Paging and sorting for the reviewer console's application list."""


from fastapi import Query
from pydantic import BaseModel

from vendor_kyc.core.exceptions import ValidationError

# Sort keys the console may send (camelCase, as on the wire) -> column names
SORT_FIELDS = {
    "submittedAt": "submitted_at",
    "reviewedAt": "reviewed_at",
    "updatedAt": "updated_at",
    "vendorId": "vendor_id",
    "businessName": "business_name",
    "status": "status",
}


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=20&sort=submittedAt&order=desc`.

    ``sort`` accepts either the camelCase key or the column name and is
    stored as the column name.
    """

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(default=20, ge=1, le=200, description="Applications per page"),
        sort: str = Query(default="submittedAt", description="Sort field"),
        order: str = Query(default="desc", pattern="^(asc|desc)$", description="Sort order"),
    ):
        self.page = page
        self.limit = limit
        self.sort = _sort_column(sort)
        self.order = order

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _sort_column(value: str) -> str:
    if value in SORT_FIELDS:
        return SORT_FIELDS[value]
    if value in SORT_FIELDS.values():
        return value
    raise ValidationError(
        f"Cannot sort by '{value}'. Expected one of: {', '.join(SORT_FIELDS)}"
    )


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int
