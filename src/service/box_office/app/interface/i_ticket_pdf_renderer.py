from abc import ABC, abstractmethod

from src.service.box_office.app.dto.ticket_delivery import TicketDocument


class ITicketPdfRenderer(ABC):
    @abstractmethod
    def render(self, *, document: TicketDocument) -> bytes:
        pass
