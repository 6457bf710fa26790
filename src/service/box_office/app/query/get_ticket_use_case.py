from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.entity.user_entity import UserEntity


class GetTicketUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_ticket(self, *, ticket_id: int, requester: UserEntity) -> Ticket:
        async with self.uow:
            ticket = await self.uow.ticket_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')
        if not requester.can_access(ticket.customer_id):
            raise ForbiddenError('You can only view your own tickets')
        return ticket
