from datetime import date
from unittest.mock import AsyncMock, patch

from pydantic import SecretStr
import pytest

from src.platform.config.core_setting import Settings
from src.service.box_office.app.dto.ticket_delivery import TicketDocument
from src.service.box_office.app.interface.i_email_sender import EmailAttachment
from src.service.box_office.driven_adapter.notification.smtp_email_sender import SmtpEmailSender
from src.service.box_office.driven_adapter.notification.ticket_pdf_renderer import (
    ReportlabTicketPdfRenderer,
)


def _document(**overrides) -> TicketDocument:
    values = {
        'ticket_id': 1,
        'ticket_number': 'TKT-0A1B2C3D4E5F',
        'event_title': 'The Tempest',
        'venue_name': 'Main House',
        'venue_address': '1 Riverside',
        'performance_date': date(2025, 3, 14),
        'start_time': '19:30',
        'end_time': '22:00',
        'seat_label': 'Stalls - Row C, Seat 12',
        'category': 'standard',
        'price': 45.0,
        'customer_name': 'Ada Lovelace',
        'customer_email': 'ada@example.com',
        'barcode_data': 'TKT-0A1B2C3D4E5F-1-1-Stalls-C-12',
        'qr_code_data': '{"ticket_number":"TKT-0A1B2C3D4E5F"}',
    }
    values.update(overrides)
    return TicketDocument(**values)


class TestReportlabTicketPdfRenderer:
    def test_renders_a_pdf(self):
        pdf = ReportlabTicketPdfRenderer(box_office_name='Test Box Office').render(
            document=_document()
        )

        assert pdf.startswith(b'%PDF')
        assert len(pdf) > 1000

    def test_general_admission_without_address(self):
        pdf = ReportlabTicketPdfRenderer(box_office_name='Test Box Office').render(
            document=_document(venue_address='', seat_label='General Admission')
        )

        assert pdf.startswith(b'%PDF')


class TestSmtpEmailSender:
    @pytest.fixture
    def sender(self) -> SmtpEmailSender:
        return SmtpEmailSender(
            config=Settings(
                EMAIL_BACKEND='smtp',
                SMTP_HOST='smtp.example.com',
                SMTP_PORT=2525,
                SMTP_USER='mailer',
                SMTP_PASSWORD=SecretStr('hunter2'),
                BOX_OFFICE_NAME='Test Box Office',
                EMAIL_FROM='tickets@example.com',
            )
        )

    def test_message_with_pdf_attachment(self, sender):
        message = sender._build_message(
            to='ada@example.com',
            subject='Your Ticket Confirmation',
            body='Dear Ada',
            attachments=[EmailAttachment(filename='ticket.pdf', content=b'%PDF-1.4')],
        )

        assert message['From'] == 'Test Box Office <tickets@example.com>'
        assert message['To'] == 'ada@example.com'
        [attachment] = list(message.iter_attachments())
        assert attachment.get_filename() == 'ticket.pdf'
        assert attachment.get_content_type() == 'application/pdf'
        assert attachment.get_content() == b'%PDF-1.4'

    @pytest.mark.asyncio
    async def test_send_uses_configured_server(self, sender):
        with patch(
            'src.service.box_office.driven_adapter.notification.smtp_email_sender.aiosmtplib.send',
            new_callable=AsyncMock,
        ) as mock_send:
            await sender.send_email(to='ada@example.com', subject='Hi', body='Dear Ada')

        kwargs = mock_send.await_args.kwargs
        assert kwargs['hostname'] == 'smtp.example.com'
        assert kwargs['port'] == 2525
        assert kwargs['username'] == 'mailer'
        assert kwargs['password'] == 'hunter2'
