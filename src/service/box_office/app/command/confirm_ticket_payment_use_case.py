from typing import Dict, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.dto.ticket_delivery import DeliveryJob, DeliveryKind, TicketDocument
from src.service.box_office.app.interface.i_ticket_delivery_queue import ITicketDeliveryQueue
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.entity.user_entity import UserEntity


class ConfirmTicketPaymentUseCase:
    """reserved / pending tickets become purchased / completed against a completed payment"""

    def __init__(self, *, uow: AbstractUnitOfWork, delivery_queue: ITicketDeliveryQueue) -> None:
        self.uow = uow
        self.delivery_queue = delivery_queue

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        delivery_queue: ITicketDeliveryQueue = Depends(Provide[Container.ticket_delivery_queue]),
    ) -> Self:
        return cls(uow=uow, delivery_queue=delivery_queue)

    @Logger.io
    async def confirm_payment(
        self, *, ticket_ids: List[int], payment_id: int, requester: UserEntity
    ) -> List[Ticket]:
        tickets, events = await self._confirm(
            ticket_ids=ticket_ids, payment_id=payment_id, requester=requester
        )
        for ticket in tickets:
            self.delivery_queue.enqueue(
                job=DeliveryJob(
                    kind=DeliveryKind.PAYMENT_CONFIRMATION,
                    document=TicketDocument.build(ticket=ticket, event=events[ticket.event_id]),
                )
            )
        return tickets

    @retry_on_conflict
    async def _confirm(
        self, *, ticket_ids: List[int], payment_id: int, requester: UserEntity
    ) -> tuple[List[Ticket], Dict[int, Event]]:
        unique_ids = list(dict.fromkeys(ticket_ids))
        if not unique_ids:
            raise DomainError('Please provide ticket ids to confirm')

        async with self.uow:
            payment = await self.uow.payment_repo.get_by_id(payment_id=payment_id)
            if not payment:
                raise NotFoundError('Payment not found')
            if not requester.can_access(payment.customer_id):
                raise ForbiddenError('Payment belongs to another customer')
            payment.ensure_usable_for_purchase()

            tickets = await self.uow.ticket_repo.get_by_ids(ticket_ids=unique_ids)
            missing = set(unique_ids) - {ticket.id for ticket in tickets}
            if missing:
                raise NotFoundError(f'Tickets not found: {sorted(missing)}')

            confirmed: List[Ticket] = []
            events: Dict[int, Event] = {}
            for ticket in tickets:
                if ticket.customer_id != payment.customer_id:
                    raise ForbiddenError(
                        f'Ticket {ticket.ticket_number} does not belong to the payer'
                    )
                transition = ticket.confirm_payment(payment_id=payment.id)
                saved = await self.uow.ticket_repo.update_status(
                    ticket=transition.ticket, expected_status=transition.previous_status
                )
                confirmed.append(saved)
                if ticket.event_id not in events:
                    event = await self.uow.event_repo.get_by_id(event_id=ticket.event_id)
                    if not event:
                        raise NotFoundError('Event not found')
                    events[ticket.event_id] = event

            await self.uow.commit()
        return confirmed, events
