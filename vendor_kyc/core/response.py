"""Response envelopes: `{ data: ... }` for one application, `{ data: [...], meta }` for lists."""


import math
from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from vendor_kyc.core.pagination import PageMeta

T = TypeVar("T")


class _Envelope(BaseModel):
    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class DataResponse(_Envelope, Generic[T]):
    data: T


class ListResponse(_Envelope, Generic[T]):
    data: list[T]
    meta: PageMeta


def paginated(items: list, total: int, page: int, limit: int) -> dict:
    """Wrap one page of results with its paging metadata."""
    meta = PageMeta(
        total=total,
        page=page,
        limit=limit,
        pages=math.ceil(total / limit) if limit else 1,
    )
    return {"data": items, "meta": meta}
