from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.dto.ticket_delivery import DeliveryJob, DeliveryKind, TicketDocument
from src.service.box_office.app.interface.i_ticket_delivery_queue import ITicketDeliveryQueue
from src.service.box_office.domain.entity.user_entity import UserEntity


class SendTicketEmailUseCase:
    """Queue the ticket mail again, e.g. when the customer lost the first one"""

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
    async def send_ticket_email(self, *, ticket_id: int, requester: UserEntity) -> bool:
        async with self.uow:
            ticket = await self.uow.ticket_repo.get_by_id(ticket_id=ticket_id)
            if not ticket:
                raise NotFoundError('Ticket not found')
            if not requester.can_access(ticket.customer_id):
                raise ForbiddenError('You can only send your own tickets')
            if ticket.is_released:
                raise InvalidStateError(f'Ticket is {ticket.status} and cannot be sent')
            event = await self.uow.event_repo.get_by_id(event_id=ticket.event_id)
            if not event:
                raise NotFoundError('Event not found')

        return self.delivery_queue.enqueue(
            job=DeliveryJob(
                kind=DeliveryKind.TICKET_CONFIRMATION,
                document=TicketDocument.build(ticket=ticket, event=event),
            )
        )
