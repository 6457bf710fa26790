"""
Ticket delivery queue

Purchases commit first and hand their delivery jobs to this queue afterwards,
so a slow or failing mail server never holds a database transaction open and
never turns a successful purchase into an error.

    use case ── enqueue() ──▶ memory stream ──▶ run() ──▶ deliver()
                (non-blocking)   (bounded)      (task group)  render PDF + send mail, retried
"""

from functools import partial
from typing import Optional

import anyio
from anyio import BrokenResourceError, ClosedResourceError, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.app.dto.ticket_delivery import DeliveryJob, DeliveryKind, TicketDocument
from src.service.box_office.app.interface.i_email_sender import EmailAttachment, IEmailSender
from src.service.box_office.app.interface.i_ticket_delivery_queue import ITicketDeliveryQueue
from src.service.box_office.app.interface.i_ticket_pdf_renderer import ITicketPdfRenderer


TICKET_CONFIRMATION_SUBJECT = 'Your Ticket Confirmation'
PAYMENT_CONFIRMATION_SUBJECT = 'Payment Confirmation'


def build_email_body(*, kind: DeliveryKind, document: TicketDocument, box_office_name: str) -> str:
    if kind == DeliveryKind.PAYMENT_CONFIRMATION:
        intro = 'Your payment has been received and your ticket is confirmed.'
    else:
        intro = 'Thank you for your purchase. Your e-ticket is attached to this email.'
    return (
        f'Dear {document.customer_name},\n\n'
        f'{intro}\n\n'
        f'Event: {document.event_title}\n'
        f'Venue: {document.venue_name}\n'
        f'Date: {document.performance_date.isoformat()}\n'
        f'Time: {document.start_time} - {document.end_time}\n'
        f'Seat: {document.seat_label}\n'
        f'Ticket number: {document.ticket_number}\n'
        f'Price: ${document.price:,.2f}\n\n'
        f'Please bring the attached ticket to the venue.\n\n'
        f'{box_office_name}'
    )


class TicketDeliveryQueue(ITicketDeliveryQueue):
    def __init__(
        self,
        *,
        email_sender: IEmailSender,
        pdf_renderer: ITicketPdfRenderer,
        box_office_name: str,
        max_buffer_size: int = 1000,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
    ):
        self.email_sender = email_sender
        self.pdf_renderer = pdf_renderer
        self.box_office_name = box_office_name
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self._send_stream: MemoryObjectSendStream[DeliveryJob]
        self._receive_stream: MemoryObjectReceiveStream[DeliveryJob]
        self._send_stream, self._receive_stream = create_memory_object_stream[DeliveryJob](
            max_buffer_size=max_buffer_size
        )

    def enqueue(self, *, job: DeliveryJob) -> bool:
        try:
            self._send_stream.send_nowait(job)
        except WouldBlock:
            Logger.base.warning(
                f'⚠️ [DELIVERY] Queue full, dropping {job.kind} for ticket {job.document.ticket_number}'
            )
            metrics.record_delivery(kind=job.kind, result='dropped')
            return False
        except (ClosedResourceError, BrokenResourceError):
            Logger.base.warning(
                f'⚠️ [DELIVERY] Queue closed, dropping {job.kind} for ticket {job.document.ticket_number}'
            )
            metrics.record_delivery(kind=job.kind, result='dropped')
            return False
        return True

    async def run(self) -> None:
        """Consume jobs until the queue is closed; run inside a task group"""
        Logger.base.info('📨 [DELIVERY] Worker started')
        async with self._receive_stream:
            async for job in self._receive_stream:
                await self.deliver(job)
        Logger.base.info('📨 [DELIVERY] Worker stopped')

    async def close(self) -> None:
        await self._send_stream.aclose()

    async def deliver(self, job: DeliveryJob) -> bool:
        """Render and mail one job; failures are logged and counted, never raised"""
        document = job.document
        subject = (
            PAYMENT_CONFIRMATION_SUBJECT
            if job.kind == DeliveryKind.PAYMENT_CONFIRMATION
            else TICKET_CONFIRMATION_SUBJECT
        )
        last_error: Optional[Exception] = None
        pdf: Optional[bytes] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                # reportlab is blocking; a PDF that rendered is reused when only the send failed
                if pdf is None:
                    pdf = await anyio.to_thread.run_sync(
                        partial(self.pdf_renderer.render, document=document)
                    )
                await self.email_sender.send_email(
                    to=document.customer_email,
                    subject=subject,
                    body=build_email_body(
                        kind=job.kind, document=document, box_office_name=self.box_office_name
                    ),
                    attachments=[EmailAttachment(filename=document.attachment_name, content=pdf)],
                )
            except Exception as e:
                last_error = e
                Logger.base.warning(
                    f'⚠️ [DELIVERY] Attempt {attempt}/{self.max_attempts} for ticket '
                    f'{document.ticket_number} failed: {e}'
                )
                if attempt < self.max_attempts:
                    await anyio.sleep(self.retry_delay * attempt)
                continue

            Logger.base.info(f'✅ [DELIVERY] Sent {job.kind} for ticket {document.ticket_number}')
            metrics.record_delivery(kind=job.kind, result='sent')
            return True

        Logger.base.error(
            f'❌ [DELIVERY] Giving up on ticket {document.ticket_number} after '
            f'{self.max_attempts} attempts: {last_error}'
        )
        metrics.record_delivery(kind=job.kind, result='failed')
        return False
