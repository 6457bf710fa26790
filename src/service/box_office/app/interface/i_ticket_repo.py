from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.enum.ticket_status import TicketStatus
from src.service.box_office.domain.value_object.seat_locator import SeatLocator


class ITicketRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, ticket_id: int) -> Optional[Ticket]:
        pass

    @abstractmethod
    async def get_by_ids(self, *, ticket_ids: List[int]) -> List[Ticket]:
        pass

    @abstractmethod
    async def list_by_order(self, *, order_id: int) -> List[Ticket]:
        pass

    @abstractmethod
    async def count_by_performance(self, *, performance_id: int) -> int:
        pass

    @abstractmethod
    async def find_held_seats(
        self, *, performance_id: int, seats: List[SeatLocator], exclude_ticket_id: int | None = None
    ) -> List[SeatLocator]:
        """Requested seats already held by a non-cancelled ticket"""
        pass

    @abstractmethod
    async def create_many(self, *, tickets: List[Ticket]) -> List[Ticket]:
        """
        Insert tickets.

        Raises SeatUnavailableError when the storage seat constraint rejects a
        row, ConflictRetryableError on a ticket number collision.
        """
        pass

    @abstractmethod
    async def update_status(self, *, ticket: Ticket, expected_status: TicketStatus) -> Ticket:
        """
        Persist status, payment_status and payment_id of one ticket

        Only applies while the stored status still equals expected_status;
        otherwise raises ConflictRetryableError so the caller re-reads.
        """
        pass
