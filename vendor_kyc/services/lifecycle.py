"""Vendor application lifecycle: the transition table and the history ledger.

The whole state machine is the ``_TRANSITIONS`` table below. ``plan_transition``
looks an event up against the current status and returns a ``Transition``
describing the next status and its field effects; ``apply_transition`` writes
those effects and appends exactly one ledger entry. Anything not in the table
is refused before the record is touched.

    Pending  --approve-->   Approved
    Pending  --reject-->    Rejected
    Rejected --resubmit-->  Pending    (automatic, on document upload)
    Rejected --approve-->   Approved   ("approve anyway")
    Rejected --reject-->    Rejected   (update reason)
    Approved --reject-->    Rejected   ("revoke")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from vendor_kyc.core.exceptions import ValidationError
from vendor_kyc.domain.enums import VendorStatus
from vendor_kyc.domain.history import StatusHistoryEntry
from vendor_kyc.domain.mixins import utcnow
from vendor_kyc.domain.vendor import VendorApplication

logger = logging.getLogger(__name__)

SUBMITTED_COMMENT = "Vendor application submitted"
APPROVED_COMMENT = "Application approved"
RESUBMITTED_COMMENT = "Vendor uploaded new documents after rejection. Pending re-review."


class Event(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    RESUBMIT = "resubmit"


class Review(str, Enum):
    """What happens to reviewed_at / reviewed_by."""

    RECORD = "record"
    CLEAR = "clear"


@dataclass(frozen=True)
class Transition:
    source: VendorStatus
    target: VendorStatus
    event: Event
    review: Review
    reason: str | None = None
    comment: str | None = None
    system_generated: bool = False


_S = VendorStatus

# (current status, event) -> (next status, review effect, system generated)
_TRANSITIONS: dict[tuple[VendorStatus, Event], tuple[VendorStatus, Review, bool]] = {
    (_S.PENDING, Event.APPROVE): (_S.APPROVED, Review.RECORD, False),
    (_S.PENDING, Event.REJECT): (_S.REJECTED, Review.RECORD, False),
    (_S.REJECTED, Event.RESUBMIT): (_S.PENDING, Review.CLEAR, True),
    (_S.REJECTED, Event.APPROVE): (_S.APPROVED, Review.RECORD, False),
    (_S.REJECTED, Event.REJECT): (_S.REJECTED, Review.RECORD, False),
    (_S.APPROVED, Event.REJECT): (_S.REJECTED, Review.RECORD, False),
}

# Reviewer-facing target statuses and the event each one means
_REVIEW_EVENTS = {
    _S.APPROVED: Event.APPROVE,
    _S.REJECTED: Event.REJECT,
}


def parse_target_status(value: str) -> VendorStatus:
    """Map a requested status string onto a reviewer decision.

    Raises ValidationError for unknown values and for ``Pending``, which only
    the system can set (on resubmission).
    """
    try:
        status = VendorStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in _REVIEW_EVENTS)
        raise ValidationError(f"Unknown status '{value}'. Expected one of: {allowed}")
    if status not in _REVIEW_EVENTS:
        raise ValidationError("Applications return to Pending only when the vendor resubmits")
    return status


def check_reason(event: Event, reason: str | None) -> str | None:
    """Normalise *reason*; a rejection without one is refused."""
    reason = (reason or "").strip() or None
    if event is Event.REJECT and not reason:
        raise ValidationError("A rejection reason is required to reject an application")
    return reason


def review_event(target: VendorStatus) -> Event:
    return _REVIEW_EVENTS[target]


def plan_transition(
    current: VendorStatus | str,
    event: Event,
    reason: str | None = None,
) -> Transition:
    """Resolve *event* against *current*; raise ValidationError if it is not allowed."""
    current = VendorStatus(current)
    reason = check_reason(event, reason)

    entry = _TRANSITIONS.get((current, event))
    if entry is None:
        raise ValidationError(
            f"Cannot {event.value} an application that is {current.value}"
        )
    target, review, system_generated = entry

    if event is Event.APPROVE:
        comment = APPROVED_COMMENT
    elif event is Event.REJECT:
        comment = reason
    else:
        comment = RESUBMITTED_COMMENT

    return Transition(
        source=current,
        target=target,
        event=event,
        review=review,
        reason=reason if target is VendorStatus.REJECTED else None,
        comment=comment,
        system_generated=system_generated,
    )


def plan_review(current: VendorStatus | str, target: VendorStatus, reason: str | None) -> Transition:
    return plan_transition(current, review_event(target), reason)


def append_history(
    application: VendorApplication,
    status: VendorStatus,
    *,
    changed_by: str | None,
    comment: str | None,
    system_generated: bool,
    at: datetime | None = None,
) -> StatusHistoryEntry:
    """Append one ledger entry at the next position. Existing entries are never touched."""
    entry = StatusHistoryEntry(
        sequence=len(application.status_history),
        status=status.value,
        changed_by=changed_by,
        changed_at=at or utcnow(),
        comment=comment,
        system_generated=system_generated,
    )
    application.status_history.append(entry)
    return entry


def seed_history(application: VendorApplication) -> StatusHistoryEntry:
    """Write the registration entry; must be the first entry of every ledger."""
    if application.status_history:
        raise ValueError("Status history is already seeded")
    return append_history(
        application,
        VendorStatus.PENDING,
        changed_by=None,
        comment=SUBMITTED_COMMENT,
        system_generated=True,
        at=application.submitted_at,
    )


def apply_transition(
    application: VendorApplication,
    transition: Transition,
    actor_id: str | None,
) -> StatusHistoryEntry:
    """Write *transition*'s field effects and its ledger entry onto *application*.

    Both changes land in the same flush, so they commit or roll back together.
    """
    if VendorStatus(application.status) is not transition.source:
        raise ValidationError(
            f"Application {application.vendor_id} is {application.status}, "
            f"not {transition.source.value}"
        )

    now = utcnow()
    application.status = transition.target.value
    application.rejection_reason = transition.reason
    if transition.review is Review.RECORD:
        application.reviewed_at = now
        application.reviewed_by = actor_id
    else:
        application.reviewed_at = None
        application.reviewed_by = None
    application.touch()

    entry = append_history(
        application,
        transition.target,
        changed_by=actor_id,
        comment=transition.comment,
        system_generated=transition.system_generated,
        at=now,
    )
    logger.info(
        "Vendor %s: %s -> %s (%s by %s)",
        application.vendor_id,
        transition.source.value,
        transition.target.value,
        transition.event.value,
        actor_id or "system",
    )
    return entry
