"""
Administrative ticket status change

Staff move tickets between reserved, purchased, used and cancelled. Taking a
ticket out of cancelled (reactivation) is reserved to managers and admins:
the seat is checked again and one unit of inventory is taken back, failing
with NoInventoryError when the performance has none left.
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    DomainError,
    ForbiddenError,
    InsufficientInventoryError,
    NoInventoryError,
    NotFoundError,
    SeatUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.app.service.inventory_release import restore_inventory
from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.entity.user_entity import UserEntity
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.ticket_status import TicketStatus


ASSIGNABLE_STATUSES = frozenset(
    {TicketStatus.RESERVED, TicketStatus.PURCHASED, TicketStatus.USED, TicketStatus.CANCELLED}
)


class UpdateTicketStatusUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    async def _reclaim(self, *, ticket: Ticket, requester: UserEntity) -> int:
        if not requester.is_supervisor:
            raise ForbiddenError('Only managers and admins can reactivate cancelled tickets')

        performance = await self.uow.performance_repo.get_by_id(
            performance_id=ticket.performance_id
        )
        if not performance:
            raise NotFoundError('Performance not found')
        if performance.available_tickets <= 0:
            raise NoInventoryError('No tickets available for this performance')

        if ticket.seat is not None:
            held = await self.uow.ticket_repo.find_held_seats(
                performance_id=ticket.performance_id,
                seats=[ticket.seat],
                exclude_ticket_id=ticket.id,
            )
            if held:
                raise SeatUnavailableError([ticket.seat_label], 'This seat is already taken')

        try:
            return await self.uow.performance_repo.decrement_available(
                performance_id=ticket.performance_id,
                quantity=1,
                kind=InventoryAdjustmentKind.REACTIVATION,
                actor_id=requester.id,
            )
        except InsufficientInventoryError as e:
            raise NoInventoryError('No tickets available for this performance') from e

    @Logger.io
    @retry_on_conflict
    async def update_status(
        self, *, ticket_id: int, new_status: TicketStatus, requester: UserEntity
    ) -> Ticket:
        if new_status not in ASSIGNABLE_STATUSES:
            raise DomainError(f'Ticket status cannot be set to {new_status}')

        async with self.uow:
            ticket = await self.uow.ticket_repo.get_by_id(ticket_id=ticket_id)
            if not ticket:
                raise NotFoundError('Ticket not found')

            reactivating = ticket.status == TicketStatus.CANCELLED and new_status in (
                TicketStatus.RESERVED,
                TicketStatus.PURCHASED,
            )
            available = None
            if reactivating:
                available = await self._reclaim(ticket=ticket, requester=requester)

            transition = ticket.transition_to(new_status)
            if not transition.changed:
                return ticket

            saved = await self.uow.ticket_repo.update_status(
                ticket=transition.ticket, expected_status=transition.previous_status
            )
            if transition.inventory_delta > 0:
                await restore_inventory(
                    uow=self.uow,
                    transitions=[transition],
                    kind=InventoryAdjustmentKind.CANCELLATION,
                    actor_id=requester.id,
                )
            await self.uow.commit()

        if available is not None:
            metrics.record_inventory_change(
                performance_id=saved.performance_id,
                kind=InventoryAdjustmentKind.REACTIVATION,
                available=available,
            )
        Logger.base.info(
            f'🎟️ [TICKET] {saved.ticket_number}: {transition.previous_status} -> {saved.status}'
        )
        return saved
