"""
In-memory unit of work for use case tests

Repositories are AsyncMock objects; tests configure return values per case
and assert on the awaited calls. commit/rollback are recorded, nothing is
stored.
"""

from unittest.mock import AsyncMock

from src.platform.database.unit_of_work import AbstractUnitOfWork


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self) -> None:
        self.event_repo = AsyncMock()
        self.payment_repo = AsyncMock()
        self.performance_repo = AsyncMock()
        self.ticket_repo = AsyncMock()
        self.order_repo = AsyncMock()
        self.committed = 0
        self.rolled_back = 0
        self.entered = 0

        self.ticket_repo.find_held_seats.return_value = []
        self.ticket_repo.update_status.side_effect = lambda *, ticket, expected_status: ticket

    async def __aenter__(self) -> AbstractUnitOfWork:
        self.entered += 1
        return await super().__aenter__()

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1


def assign_ids(start: int = 100):
    """side_effect for create_many: number the tickets like the database would"""

    def _create_many(*, tickets):
        for offset, ticket in enumerate(tickets):
            ticket.id = start + offset
        return tickets

    return _create_many
