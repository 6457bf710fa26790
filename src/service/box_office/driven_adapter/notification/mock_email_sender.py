"""Mock email sender that logs instead of sending real emails."""

from datetime import datetime
from typing import List

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_email_sender import EmailAttachment, IEmailSender


class MockEmailSender(IEmailSender):
    def __init__(self, debug: bool = True):
        self.debug = debug
        self.sent_emails: List[dict] = []  # Store sent emails for testing

    @Logger.io
    async def send_email(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        attachments: List[EmailAttachment] | None = None,
    ) -> None:
        email_data = {
            'to': to,
            'subject': subject,
            'body': body,
            'attachments': list(attachments or []),
            'sent_at': datetime.now(),
        }
        self.sent_emails.append(email_data)

        if self.debug:
            names = ', '.join(a.filename for a in email_data['attachments']) or '-'
            Logger.base.info(f'📧 [MOCK EMAIL] to={to} subject="{subject}" attachments={names}')
