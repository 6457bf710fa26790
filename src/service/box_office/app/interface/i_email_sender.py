from abc import ABC, abstractmethod
from typing import List

import attrs


@attrs.frozen
class EmailAttachment:
    filename: str
    content: bytes = attrs.field(repr=lambda content: f'<{len(content)} bytes>')
    content_type: str = 'application/pdf'


class IEmailSender(ABC):
    @abstractmethod
    async def send_email(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        attachments: List[EmailAttachment] | None = None,
    ) -> None:
        """Deliver one message or raise; retries belong to the caller"""
        pass
