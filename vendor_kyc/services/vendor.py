"""Vendor application service - registration, documents, review decisions.

Every write goes through ``run_atomic``: the application is re-read, the
actor's ownership or role is checked against that fresh copy, the change and
any ledger entry are applied, and the result is committed as one unit. A lost
race is replayed; an exhausted retry budget surfaces as ``ConflictError``.

Rule: No FastAPI here. Routers call this service; this service calls the
repositories and the lifecycle module.
"""


import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from vendor_kyc.core.exceptions import (
    DuplicateEmailError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from vendor_kyc.core.pagination import PaginationParams
from vendor_kyc.core.security import Actor, Role
from vendor_kyc.db.unit_of_work import run_atomic
from vendor_kyc.domain.document import VendorDocument
from vendor_kyc.domain.enums import DocumentType, VendorStatus
from vendor_kyc.domain.mixins import utcnow
from vendor_kyc.domain.vendor import VendorApplication
from vendor_kyc.repositories.vendor import VendorRepository
from vendor_kyc.schemas.vendor import VendorProfileUpdate, VendorRegistration
from vendor_kyc.services import lifecycle
from vendor_kyc.services.identifiers import next_vendor_id

logger = logging.getLogger(__name__)

# Scalar profile columns an owner may edit; address is handled as a block
_PROFILE_FIELDS = ("business_name", "business_category", "contact_person", "phone")


class VendorService:
    def __init__(self, session: AsyncSession):
        self._session = session
        self._repo = VendorRepository(session)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_application(self, vendor_id: str) -> VendorApplication:
        application = await self._repo.get_by_vendor_id(vendor_id)
        if not application:
            raise NotFoundError("Vendor application", vendor_id)
        return application

    async def get_for_owner(self, actor: Actor) -> VendorApplication:
        application = await self._repo.get_by_owner(actor.user_id)
        if not application:
            raise NotFoundError("Vendor profile")
        return application

    async def list_applications(
        self,
        pagination: PaginationParams,
        status: VendorStatus | None = None,
        search: str | None = None,
    ):
        return await self._repo.search(
            status=status.value if status else None,
            search=search,
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
        )

    async def stats(self, recent_limit: int = 5) -> dict:
        counts = await self._repo.count_by_status()
        return {
            "total_applications": sum(counts.values()),
            "pending_count": counts.get(VendorStatus.PENDING.value, 0),
            "approved_count": counts.get(VendorStatus.APPROVED.value, 0),
            "rejected_count": counts.get(VendorStatus.REJECTED.value, 0),
            "recent_vendors": await self._repo.recent(recent_limit),
        }

    # ------------------------------------------------------------------
    # Registration and ownership
    # ------------------------------------------------------------------

    async def create_application(self, data: VendorRegistration) -> VendorApplication:
        """Register a new vendor: reserve the next VEN id and seed the ledger."""

        async def work() -> VendorApplication:
            if await self._repo.email_exists(data.email):
                raise DuplicateEmailError(data.email)

            application = VendorApplication(
                vendor_id=await next_vendor_id(self._session),
                business_name=data.business_name,
                business_category=data.business_category.value,
                contact_person=data.contact_person,
                email=data.email,
                phone=data.phone,
                status=VendorStatus.PENDING.value,
                submitted_at=utcnow(),
                all_documents=[],
                status_history=[],
            )
            application.set_address(**data.address.model_dump())
            lifecycle.seed_history(application)
            return await self._repo.add(application)

        application = await run_atomic(self._session, work, label="Register vendor")
        logger.info("Registered vendor %s (%s)", application.vendor_id, application.email)
        return application

    async def claim_application(self, actor: Actor) -> VendorApplication:
        """Bind the application registered under the actor's email to the actor.

        Idempotent for the current owner; refused if someone else owns it.
        """
        if actor.role is not Role.VENDOR:
            raise ForbiddenError("Only vendor accounts can claim an application")

        async def work() -> VendorApplication:
            application = await self._repo.get_by_email(actor.email)
            if not application:
                raise NotFoundError("Vendor application for", actor.email)
            if application.owner_user_id is None:
                application.owner_user_id = actor.user_id
                application.touch()
                await self._session.flush()
                logger.info("Vendor %s claimed by user %s", application.vendor_id, actor.user_id)
            elif application.owner_user_id != actor.user_id:
                raise ForbiddenError("This application belongs to another account")
            return application

        return await run_atomic(self._session, work, label="Claim application")

    # ------------------------------------------------------------------
    # Owner mutations
    # ------------------------------------------------------------------

    async def update_profile(
        self, vendor_id: str, actor: Actor, changes: VendorProfileUpdate
    ) -> VendorApplication:
        values = changes.model_dump(exclude_unset=True, exclude_none=True, exclude={"address"})
        address = changes.address.model_dump() if changes.address is not None else None
        if not values and address is None:
            raise ValidationError("No profile changes supplied")

        def mutate(application: VendorApplication) -> None:
            _ensure_owner(application, actor)
            for field in _PROFILE_FIELDS:
                if field in values:
                    value = values[field]
                    setattr(application, field, getattr(value, "value", value))
            if address is not None:
                application.set_address(**address)
            application.touch()

        return await self._mutate(vendor_id, mutate, label="Update profile")

    async def add_document(
        self,
        vendor_id: str,
        actor: Actor,
        document_type: DocumentType,
        file_name: str,
        file_url: str,
    ) -> VendorApplication:
        """Attach a stored file; a Rejected application goes back to Pending."""

        def mutate(application: VendorApplication) -> None:
            _ensure_owner(application, actor)
            application.all_documents.append(
                VendorDocument(
                    document_type=DocumentType(document_type).value,
                    file_name=file_name,
                    file_url=file_url,
                    uploaded_at=utcnow(),
                    uploaded_by=actor.user_id,
                    deleted_at=None,
                )
            )
            application.touch()
            if application.status == VendorStatus.REJECTED.value:
                transition = lifecycle.plan_transition(
                    application.status, lifecycle.Event.RESUBMIT
                )
                lifecycle.apply_transition(application, transition, actor.user_id)

        application = await self._mutate(vendor_id, mutate, label="Upload document")
        logger.info(
            "Document %s uploaded for vendor %s (%d active)",
            DocumentType(document_type).value, vendor_id, len(application.documents),
        )
        return application

    async def remove_document(self, vendor_id: str, actor: Actor, document_id: str) -> None:
        """Hide a document from the application. The ledger is left as it is."""

        def mutate(application: VendorApplication) -> None:
            _ensure_owner(application, actor)
            document = next((d for d in application.documents if d.id == document_id), None)
            if document is None:
                raise NotFoundError("Document", document_id)
            document.deleted_at = utcnow()
            application.touch()

        await self._mutate(vendor_id, mutate, label="Remove document")
        logger.info("Document %s removed from vendor %s", document_id, vendor_id)

    # ------------------------------------------------------------------
    # Reviewer mutations
    # ------------------------------------------------------------------

    async def set_status(
        self,
        vendor_id: str,
        actor: Actor,
        target_status: str,
        reason: str | None = None,
    ) -> VendorApplication:
        """Approve, reject, revoke, or update a rejection reason."""
        _ensure_reviewer(actor)
        target = lifecycle.parse_target_status(target_status)
        lifecycle.check_reason(lifecycle.review_event(target), reason)

        def mutate(application: VendorApplication) -> None:
            _ensure_reviewer(actor)
            transition = lifecycle.plan_review(application.status, target, reason)
            lifecycle.apply_transition(application, transition, actor.user_id)

        return await self._mutate(vendor_id, mutate, label="Set status")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _mutate(
        self,
        vendor_id: str,
        mutate: Callable[[VendorApplication], None],
        *,
        label: str,
    ) -> VendorApplication:
        async def work() -> VendorApplication:
            application = await self._repo.get_by_vendor_id(vendor_id)
            if not application:
                raise NotFoundError("Vendor application", vendor_id)
            mutate(application)
            await self._session.flush()
            return application

        return await run_atomic(self._session, work, label=f"{label} ({vendor_id})")


def _ensure_owner(application: VendorApplication, actor: Actor) -> None:
    if actor.role is not Role.VENDOR or application.owner_user_id != actor.user_id:
        raise ForbiddenError("Only the application owner can make this change")


def _ensure_reviewer(actor: Actor) -> None:
    if not actor.is_reviewer:
        raise ForbiddenError("Only reviewers can change an application's status")
