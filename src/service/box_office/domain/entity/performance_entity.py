from datetime import date, datetime
import re
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import (
    DomainError,
    InsufficientInventoryError,
    InvalidStateError,
    PerformanceSoldOutError,
)
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.value_object.performance_snapshot import PerformanceSnapshot
from src.service.box_office.domain.value_object.ticket_type import TicketType


_TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')
_EDITABLE_AFTER_SALES = frozenset({'notes', 'is_active'})


@attrs.define
class Performance:
    """
    One scheduled showing of an event and its remaining inventory.

    available_tickets is changed by the database through atomic conditional
    updates; the methods here validate requests and mirror the result on the
    loaded entity.
    """

    event_id: int
    date: date
    start_time: str
    end_time: str
    total_capacity: int
    available_tickets: int
    ticket_types: List[TicketType] = attrs.field(factory=list)
    is_active: bool = True
    is_cancelled: bool = False
    notes: str = ''
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_sold_out(self) -> bool:
        return self.available_tickets <= 0

    @property
    def sold_tickets(self) -> int:
        return self.total_capacity - self.available_tickets

    @property
    def percentage_sold(self) -> int:
        if self.total_capacity <= 0:
            return 0
        return round(self.sold_tickets / self.total_capacity * 100)

    @property
    def has_sales(self) -> bool:
        return self.sold_tickets > 0

    @property
    def snapshot(self) -> PerformanceSnapshot:
        return PerformanceSnapshot(date=self.date, start_time=self.start_time, end_time=self.end_time)

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        event_id: int,
        date: date,
        start_time: str,
        end_time: str,
        ticket_types: List[TicketType],
        notes: str = '',
    ) -> 'Performance':
        if not ticket_types:
            raise DomainError('At least one ticket type is required')
        for ticket_type in ticket_types:
            ticket_type.validate()
        cls._validate_times(start_time=start_time, end_time=end_time)

        capacity = sum(ticket_type.available_count for ticket_type in ticket_types)
        return cls(
            event_id=event_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            total_capacity=capacity,
            available_tickets=capacity,
            ticket_types=list(ticket_types),
            notes=notes,
        )

    @staticmethod
    def _validate_times(*, start_time: str, end_time: str) -> None:
        for value in (start_time, end_time):
            if not _TIME_PATTERN.match(value):
                raise DomainError(f'Time must be HH:MM, got {value!r}')
        if end_time <= start_time:
            raise DomainError('End time must be after start time')

    def ensure_can_sell(self, quantity: int) -> None:
        if quantity <= 0:
            raise DomainError('At least one ticket must be requested')
        if self.is_cancelled:
            raise InvalidStateError('Performance is cancelled')
        if not self.is_active:
            raise InvalidStateError('Performance is not active')
        if self.is_sold_out:
            raise PerformanceSoldOutError('Performance is sold out', requested=quantity)
        if quantity > self.available_tickets:
            raise InsufficientInventoryError(
                f'Only {self.available_tickets} tickets left, {quantity} requested',
                requested=quantity,
                available=self.available_tickets,
            )

    def validate_override(self, value: int) -> None:
        if value < 0:
            raise DomainError('Available tickets must not be negative')
        if value > self.total_capacity:
            raise DomainError(
                f'Available tickets must not exceed total capacity {self.total_capacity}'
            )

    @Logger.io
    def apply_changes(self, *, has_tickets: bool = False, **changes) -> 'Performance':
        """Edit schedule details; once tickets exist only notes and is_active may change"""
        changes = {key: value for key, value in changes.items() if value is not None}
        if (has_tickets or self.has_sales) and set(changes) - _EDITABLE_AFTER_SALES:
            raise InvalidStateError(
                'Performance has tickets sold; only notes and is_active can be updated'
            )
        if 'ticket_types' in changes:
            new_types = changes.pop('ticket_types')
            if not new_types:
                raise DomainError('At least one ticket type is required')
            for ticket_type in new_types:
                ticket_type.validate()
            capacity = sum(ticket_type.available_count for ticket_type in new_types)
            changes |= {
                'ticket_types': list(new_types),
                'total_capacity': capacity,
                'available_tickets': capacity,
            }
        updated = attrs.evolve(self, **changes)
        updated._validate_times(start_time=updated.start_time, end_time=updated.end_time)
        return updated

    def deactivate(self) -> 'Performance':
        return attrs.evolve(self, is_active=False)
