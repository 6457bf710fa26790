from abc import ABC, abstractmethod

from src.service.box_office.app.dto.ticket_delivery import DeliveryJob


class ITicketDeliveryQueue(ABC):
    """Hand-off point between a committed transaction and ticket mail delivery"""

    @abstractmethod
    def enqueue(self, *, job: DeliveryJob) -> bool:
        """Never blocks; returns False when the job was dropped"""
        pass
