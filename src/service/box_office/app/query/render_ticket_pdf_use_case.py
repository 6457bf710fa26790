from functools import partial
from typing import Self

import anyio
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.dto.ticket_delivery import TicketDocument
from src.service.box_office.app.interface.i_ticket_pdf_renderer import ITicketPdfRenderer
from src.service.box_office.domain.entity.user_entity import UserEntity


class RenderTicketPdfUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, pdf_renderer: ITicketPdfRenderer) -> None:
        self.uow = uow
        self.pdf_renderer = pdf_renderer

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        pdf_renderer: ITicketPdfRenderer = Depends(Provide[Container.pdf_renderer]),
    ) -> Self:
        return cls(uow=uow, pdf_renderer=pdf_renderer)

    @Logger.io
    async def render(self, *, ticket_id: int, requester: UserEntity) -> tuple[TicketDocument, bytes]:
        async with self.uow:
            ticket = await self.uow.ticket_repo.get_by_id(ticket_id=ticket_id)
            if not ticket:
                raise NotFoundError('Ticket not found')
            if not requester.can_access(ticket.customer_id):
                raise ForbiddenError('You can only download your own tickets')
            event = await self.uow.event_repo.get_by_id(event_id=ticket.event_id)
            if not event:
                raise NotFoundError('Event not found')

        document = TicketDocument.build(ticket=ticket, event=event)
        # reportlab is synchronous
        pdf = await anyio.to_thread.run_sync(partial(self.pdf_renderer.render, document=document))
        return document, pdf
