"""
Cancel a set of tickets

Tickets already cancelled or refunded are skipped, so repeating a
cancellation never gives a unit back twice. Customers may only cancel their
own tickets; staff may cancel any.
"""

from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.service.inventory_release import restore_inventory
from src.service.box_office.domain.entity.ticket_entity import Ticket, TicketTransition
from src.service.box_office.domain.entity.user_entity import UserEntity
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.ticket_status import TicketPaymentStatus, TicketStatus


CANCELLABLE_STATUSES = (TicketStatus.RESERVED, TicketStatus.PURCHASED)
CANCELLABLE_PAYMENT_STATUSES = (TicketPaymentStatus.PENDING, TicketPaymentStatus.COMPLETED)


class CancelTicketsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @staticmethod
    def _ensure_cancellable(ticket: Ticket, requester: UserEntity) -> None:
        if not requester.can_access(ticket.customer_id):
            raise ForbiddenError('You can only cancel your own tickets')
        if ticket.is_released:
            return
        if (
            ticket.status not in CANCELLABLE_STATUSES
            or ticket.payment_status not in CANCELLABLE_PAYMENT_STATUSES
        ):
            raise InvalidStateError(
                f'Ticket {ticket.ticket_number} is {ticket.status}/{ticket.payment_status} '
                f'and cannot be cancelled'
            )

    @Logger.io
    @retry_on_conflict
    async def cancel_tickets(self, *, ticket_ids: List[int], requester: UserEntity) -> List[Ticket]:
        unique_ids = list(dict.fromkeys(ticket_ids))
        if not unique_ids:
            raise DomainError('Please provide ticket ids to cancel')

        async with self.uow:
            tickets = await self.uow.ticket_repo.get_by_ids(ticket_ids=unique_ids)
            missing = set(unique_ids) - {ticket.id for ticket in tickets}
            if missing:
                raise NotFoundError(f'Tickets not found: {sorted(missing)}')

            for ticket in tickets:
                self._ensure_cancellable(ticket, requester)

            transitions: List[TicketTransition] = []
            result: List[Ticket] = []
            for ticket in tickets:
                if ticket.is_released:
                    result.append(ticket)
                    continue
                transition = ticket.cancel()
                transitions.append(transition)
                saved = await self.uow.ticket_repo.update_status(
                    ticket=transition.ticket, expected_status=transition.previous_status
                )
                result.append(saved)

            await restore_inventory(
                uow=self.uow,
                transitions=transitions,
                kind=InventoryAdjustmentKind.CANCELLATION,
                actor_id=requester.id,
            )
            await self.uow.commit()

        Logger.base.info(
            f'🚫 [CANCEL] {len(transitions)} of {len(tickets)} tickets cancelled by user {requester.id}'
        )
        return result
