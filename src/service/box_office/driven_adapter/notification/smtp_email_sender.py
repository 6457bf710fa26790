from email.message import EmailMessage
from typing import List

import aiosmtplib

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_email_sender import EmailAttachment, IEmailSender


class SmtpEmailSender(IEmailSender):
    def __init__(self, config: Settings):
        self.config = config

    def _build_message(
        self, *, to: str, subject: str, body: str, attachments: List[EmailAttachment]
    ) -> EmailMessage:
        message = EmailMessage()
        message['From'] = f'{self.config.BOX_OFFICE_NAME} <{self.config.EMAIL_FROM}>'
        message['To'] = to
        message['Subject'] = subject
        message.set_content(body)
        for attachment in attachments:
            maintype, _, subtype = attachment.content_type.partition('/')
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype or 'octet-stream',
                filename=attachment.filename,
            )
        return message

    @Logger.io
    async def send_email(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        attachments: List[EmailAttachment] | None = None,
    ) -> None:
        message = self._build_message(
            to=to, subject=subject, body=body, attachments=list(attachments or [])
        )
        await aiosmtplib.send(
            message,
            hostname=self.config.SMTP_HOST,
            port=self.config.SMTP_PORT,
            username=self.config.SMTP_USER or None,
            password=self.config.SMTP_PASSWORD.get_secret_value() or None,
            use_tls=self.config.SMTP_USE_TLS,
            start_tls=self.config.SMTP_START_TLS,
        )
