"""Schema base shared by every request and response body."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (``vendorId``, ``statusHistory``).

    ``from_attributes`` lets response models read ORM rows directly.
    """

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class HealthResponse(BaseModel):
    status: str = "ok"
    app: str
    env: str
    version: str
