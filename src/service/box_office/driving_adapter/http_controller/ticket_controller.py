from typing import List

from fastapi import APIRouter, Depends, Response, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.command.cancel_tickets_use_case import CancelTicketsUseCase
from src.service.box_office.app.command.confirm_ticket_payment_use_case import (
    ConfirmTicketPaymentUseCase,
)
from src.service.box_office.app.command.create_ticket_use_case import CreateTicketUseCase
from src.service.box_office.app.command.send_ticket_email_use_case import SendTicketEmailUseCase
from src.service.box_office.app.command.update_ticket_status_use_case import (
    UpdateTicketStatusUseCase,
)
from src.service.box_office.app.query.get_ticket_use_case import GetTicketUseCase
from src.service.box_office.app.query.render_ticket_pdf_use_case import RenderTicketPdfUseCase
from src.service.box_office.domain.entity.user_entity import UserEntity
from src.service.box_office.domain.enum.ticket_status import TicketStatus
from src.service.box_office.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_staff,
)
from src.service.box_office.driving_adapter.schema.ticket_schema import (
    ConfirmPaymentRequest,
    TicketCreateRequest,
    TicketEmailResponse,
    TicketIdsRequest,
    TicketResponse,
    TicketStatusUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_ticket(
    request: TicketCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateTicketUseCase = Depends(CreateTicketUseCase.depends),
) -> TicketResponse:
    """Reserve one ticket that is paid for later through /confirm_payment"""
    ticket = await use_case.create_ticket(
        customer_id=current_user.id,
        customer=request.customer.to_value(),
        event_id=request.event_id,
        performance_id=request.performance_id,
        price=request.price,
        category=request.category,
        seat=request.seat.to_value() if request.seat else None,
        payment_method=request.payment_method,
    )
    return TicketResponse.from_entity(ticket)


@router.post('/cancel')
@Logger.io
async def cancel_tickets(
    request: TicketIdsRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelTicketsUseCase = Depends(CancelTicketsUseCase.depends),
) -> List[TicketResponse]:
    with tracer.start_as_current_span('controller.cancel_tickets') as span:
        span.set_attribute('ticket_count', len(request.ticket_ids))
        tickets = await use_case.cancel_tickets(
            ticket_ids=request.ticket_ids, requester=current_user
        )
        return [TicketResponse.from_entity(ticket) for ticket in tickets]


@router.post('/confirm_payment')
@Logger.io
async def confirm_ticket_payment(
    request: ConfirmPaymentRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ConfirmTicketPaymentUseCase = Depends(ConfirmTicketPaymentUseCase.depends),
) -> List[TicketResponse]:
    tickets = await use_case.confirm_payment(
        ticket_ids=request.ticket_ids, payment_id=request.payment_id, requester=current_user
    )
    return [TicketResponse.from_entity(ticket) for ticket in tickets]


@router.get('/{ticket_id}')
@Logger.io
async def get_ticket(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetTicketUseCase = Depends(GetTicketUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.get_ticket(ticket_id=ticket_id, requester=current_user)
    return TicketResponse.from_entity(ticket)


@router.patch('/{ticket_id}/status')
@Logger.io
async def update_ticket_status(
    ticket_id: int,
    request: TicketStatusUpdateRequest,
    current_user: UserEntity = Depends(require_staff),
    use_case: UpdateTicketStatusUseCase = Depends(UpdateTicketStatusUseCase.depends),
) -> TicketResponse:
    with tracer.start_as_current_span('controller.update_ticket_status') as span:
        span.set_attribute('ticket_id', ticket_id)
        span.set_attribute('status', request.status)

        # Unknown values raise ValueError, answered with 400
        new_status = TicketStatus(request.status)
        ticket = await use_case.update_status(
            ticket_id=ticket_id, new_status=new_status, requester=current_user
        )
        return TicketResponse.from_entity(ticket)


@router.get('/{ticket_id}/pdf')
@Logger.io
async def download_ticket_pdf(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: RenderTicketPdfUseCase = Depends(RenderTicketPdfUseCase.depends),
) -> Response:
    document, pdf = await use_case.render(ticket_id=ticket_id, requester=current_user)
    return Response(
        content=pdf,
        media_type='application/pdf',
        headers={'Content-Disposition': f'attachment; filename="{document.attachment_name}"'},
    )


@router.post('/{ticket_id}/email', status_code=status.HTTP_202_ACCEPTED)
@Logger.io
async def send_ticket_email(
    ticket_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: SendTicketEmailUseCase = Depends(SendTicketEmailUseCase.depends),
) -> TicketEmailResponse:
    queued = await use_case.send_ticket_email(ticket_id=ticket_id, requester=current_user)
    return TicketEmailResponse(ticket_id=ticket_id, queued=queued)
