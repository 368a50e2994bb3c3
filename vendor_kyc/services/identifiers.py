"""Human-readable vendor identifiers (``VEN-00001``).

Numbers come from the ``vendor`` counter row, never from scanning existing
applications, so the value is decided by the database in one atomic step.
"""

import re

from sqlalchemy.ext.asyncio import AsyncSession

from vendor_kyc.core.config import settings
from vendor_kyc.repositories.counter import CounterRepository

VENDOR_COUNTER = "vendor"


def format_vendor_id(number: int, prefix: str | None = None, width: int | None = None) -> str:
    """``format_vendor_id(7) -> 'VEN-00007'``. Numbers wider than *width* are not truncated."""
    if number < 1:
        raise ValueError(f"Vendor sequence numbers start at 1, got {number}")
    prefix = prefix or settings.vendor_id_prefix
    width = width or settings.vendor_id_width
    return f"{prefix}-{number:0{width}d}"


def parse_vendor_id(vendor_id: str, prefix: str | None = None) -> int | None:
    """Return the numeric part of *vendor_id*, or None if it is not one of ours."""
    prefix = prefix or settings.vendor_id_prefix
    match = re.fullmatch(rf"{re.escape(prefix)}-(\d+)", vendor_id)
    return int(match.group(1)) if match else None


async def next_vendor_id(session: AsyncSession) -> str:
    """Reserve the next identifier inside the caller's transaction.

    If the surrounding transaction rolls back, so does the increment, which
    keeps sequential registrations gap-free.
    """
    number = await CounterRepository(session).next_value(VENDOR_COUNTER)
    return format_vendor_id(number)
