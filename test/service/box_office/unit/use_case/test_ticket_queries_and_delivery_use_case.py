from unittest.mock import MagicMock

import pytest

from src.platform.exception.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from src.service.box_office.app.command.send_ticket_email_use_case import SendTicketEmailUseCase
from src.service.box_office.app.dto.ticket_delivery import DeliveryKind
from src.service.box_office.app.query.get_ticket_use_case import GetTicketUseCase
from src.service.box_office.app.query.render_ticket_pdf_use_case import RenderTicketPdfUseCase
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.enum.ticket_status import TicketStatus
from test.service.box_office.helpers import (
    CUSTOMER_USER,
    OTHER_CUSTOMER_USER,
    STAFF_USER,
    make_ticket,
)


EVENT = Event(id=1, title='The Tempest', venue_name='Main House', venue_address='1 Riverside')


class TestGetTicket:
    @pytest.mark.asyncio
    async def test_owner_and_staff_can_read(self, uow):
        uow.ticket_repo.get_by_id.return_value = make_ticket(ticket_id=1)
        use_case = GetTicketUseCase(uow=uow)

        assert (await use_case.get_ticket(ticket_id=1, requester=CUSTOMER_USER)).id == 1
        assert (await use_case.get_ticket(ticket_id=1, requester=STAFF_USER)).id == 1

    @pytest.mark.asyncio
    async def test_other_customer_is_forbidden(self, uow):
        uow.ticket_repo.get_by_id.return_value = make_ticket(ticket_id=1)

        with pytest.raises(ForbiddenError):
            await GetTicketUseCase(uow=uow).get_ticket(ticket_id=1, requester=OTHER_CUSTOMER_USER)

    @pytest.mark.asyncio
    async def test_unknown_ticket(self, uow):
        uow.ticket_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await GetTicketUseCase(uow=uow).get_ticket(ticket_id=1, requester=CUSTOMER_USER)


class TestSendTicketEmail:
    @pytest.mark.asyncio
    async def test_ticket_mail_is_queued(self, uow, queue_spy):
        uow.ticket_repo.get_by_id.return_value = make_ticket(ticket_id=1)
        uow.event_repo.get_by_id.return_value = EVENT

        queued = await SendTicketEmailUseCase(uow=uow, delivery_queue=queue_spy).send_ticket_email(
            ticket_id=1, requester=CUSTOMER_USER
        )

        assert queued
        job = queue_spy.enqueue.call_args.kwargs['job']
        assert job.kind == DeliveryKind.TICKET_CONFIRMATION
        assert job.document.event_title == 'The Tempest'

    @pytest.mark.asyncio
    async def test_cancelled_ticket_is_not_sent(self, uow, queue_spy):
        uow.ticket_repo.get_by_id.return_value = make_ticket(
            ticket_id=1, status=TicketStatus.CANCELLED
        )

        with pytest.raises(InvalidStateError):
            await SendTicketEmailUseCase(uow=uow, delivery_queue=queue_spy).send_ticket_email(
                ticket_id=1, requester=CUSTOMER_USER
            )

        queue_spy.enqueue.assert_not_called()


class TestRenderTicketPdf:
    @pytest.mark.asyncio
    async def test_renders_document_of_the_ticket(self, uow):
        ticket = make_ticket(ticket_id=1)
        uow.ticket_repo.get_by_id.return_value = ticket
        uow.event_repo.get_by_id.return_value = EVENT
        renderer = MagicMock()
        renderer.render.return_value = b'%PDF-1.4'

        document, pdf = await RenderTicketPdfUseCase(uow=uow, pdf_renderer=renderer).render(
            ticket_id=1, requester=CUSTOMER_USER
        )

        assert pdf == b'%PDF-1.4'
        assert document.ticket_number == ticket.ticket_number
        assert document.attachment_name == f'ticket-{ticket.ticket_number}.pdf'
        renderer.render.assert_called_once_with(document=document)

    @pytest.mark.asyncio
    async def test_other_customer_is_forbidden(self, uow):
        uow.ticket_repo.get_by_id.return_value = make_ticket(ticket_id=1)

        with pytest.raises(ForbiddenError):
            await RenderTicketPdfUseCase(uow=uow, pdf_renderer=MagicMock()).render(
                ticket_id=1, requester=OTHER_CUSTOMER_USER
            )
