"""Counter repository - atomic fetch-and-increment for sequential identifiers."""


from sqlalchemy import update

from vendor_kyc.domain.counter import IdCounter
from vendor_kyc.repositories.base import BaseRepository


class CounterRepository(BaseRepository[IdCounter]):
    model = IdCounter

    async def next_value(self, name: str) -> int:
        """Increment counter *name* and return the new value.

        The increment is a single ``UPDATE ... SET value = value + 1 RETURNING
        value``, so two transactions can never observe the same number. The
        first call for a name inserts the row; if two first calls race, one of
        them fails on the primary key and the unit of work is replayed.
        """
        result = await self._session.execute(
            update(IdCounter)
            .where(IdCounter.name == name)
            .values(value=IdCounter.value + 1)
            .returning(IdCounter.value)
            .execution_options(synchronize_session=False)
        )
        value = result.scalar_one_or_none()
        if value is not None:
            return value

        await self.add(IdCounter(name=name, value=1))
        return 1
