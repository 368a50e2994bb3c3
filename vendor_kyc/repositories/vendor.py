"""Vendor application repository."""


from sqlalchemy import func, or_, select

from vendor_kyc.domain.vendor import VendorApplication
from vendor_kyc.repositories.base import BaseRepository


def _escape_like(value: str) -> str:
    """Make ``%`` and ``_`` in user input match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class VendorRepository(BaseRepository[VendorApplication]):
    model = VendorApplication

    async def get_by_vendor_id(self, vendor_id: str) -> VendorApplication | None:
        result = await self._session.execute(
            self._base_query().where(VendorApplication.vendor_id == vendor_id)
        )
        return result.scalars().first()

    async def get_by_email(self, email: str) -> VendorApplication | None:
        result = await self._session.execute(
            self._base_query().where(VendorApplication.email == email)
        )
        return result.scalars().first()

    async def get_by_owner(self, owner_user_id: str) -> VendorApplication | None:
        result = await self._session.execute(
            self._base_query().where(VendorApplication.owner_user_id == owner_user_id)
        )
        return result.scalars().first()

    async def email_exists(self, email: str) -> bool:
        result = await self._session.execute(
            select(VendorApplication.id).where(VendorApplication.email == email).limit(1)
        )
        return result.first() is not None

    async def search(
        self,
        *,
        status: str | None,
        search: str | None,
        offset: int,
        limit: int,
        order_by: str,
        order: str,
    ) -> tuple[list[VendorApplication], int]:
        """Filter by status and a case-insensitive substring over the identifying fields."""
        conditions = []
        if search:
            pattern = f"%{_escape_like(search.strip().lower())}%"
            conditions.append(
                or_(
                    func.lower(VendorApplication.business_name).like(pattern, escape="\\"),
                    func.lower(VendorApplication.contact_person).like(pattern, escape="\\"),
                    func.lower(VendorApplication.vendor_id).like(pattern, escape="\\"),
                    func.lower(VendorApplication.email).like(pattern, escape="\\"),
                )
            )
        return await self.list(
            offset=offset,
            limit=limit,
            order_by=order_by,
            order=order,
            filters={"status": status},
            conditions=conditions,
        )

    async def count_by_status(self) -> dict[str, int]:
        result = await self._session.execute(
            select(VendorApplication.status, func.count()).group_by(VendorApplication.status)
        )
        return {status: count for status, count in result.all()}

    async def recent(self, limit: int = 5) -> list[VendorApplication]:
        result = await self._session.execute(
            self._base_query()
            .order_by(VendorApplication.submitted_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
