"""Atomic read-modify-write with bounded optimistic retries.

Every mutation of a vendor application runs as one unit of work: load the
current row, apply the change, commit. A concurrent writer is detected either
by the version column (``StaleDataError``) or by a unique constraint
(``IntegrityError``); the session is rolled back and the whole unit is replayed
against fresh state, up to ``settings.write_retry_limit`` attempts.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from vendor_kyc.core.config import settings
from vendor_kyc.core.exceptions import ConflictError, StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_atomic(
    session: AsyncSession,
    work: Callable[[], Awaitable[T]],
    *,
    label: str,
    attempts: int | None = None,
) -> T:
    """Run *work* and commit; replay it on write conflicts.

    *work* must re-read everything it depends on, because a retry starts from
    a rolled-back session. Application exceptions raised by *work* roll back
    and propagate untouched.
    """
    attempts = attempts or settings.write_retry_limit
    for attempt in range(1, attempts + 1):
        try:
            result = await work()
            await session.commit()
            return result
        except (StaleDataError, IntegrityError) as exc:
            await session.rollback()
            logger.warning(
                "%s: write conflict on attempt %d/%d (%s)",
                label, attempt, attempts, type(exc).__name__,
            )
        except OperationalError as exc:
            await session.rollback()
            logger.error("%s: store unavailable: %s", label, exc)
            raise StoreUnavailableError() from exc
        except Exception:
            await session.rollback()
            raise

    raise ConflictError(
        f"{label} could not be applied because of concurrent updates; please retry"
    )
