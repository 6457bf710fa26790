from datetime import date
from enum import StrEnum
from typing import Optional

import attrs

from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.entity.ticket_entity import Ticket


class DeliveryKind(StrEnum):
    TICKET_CONFIRMATION = 'ticket_confirmation'
    PAYMENT_CONFIRMATION = 'payment_confirmation'


@attrs.frozen
class TicketDocument:
    """Everything printed on an e-ticket, detached from the database session"""

    ticket_id: Optional[int]
    ticket_number: str
    event_title: str
    venue_name: str
    venue_address: str
    performance_date: date
    start_time: str
    end_time: str
    seat_label: str
    category: str
    price: float
    customer_name: str
    customer_email: str
    barcode_data: str
    qr_code_data: str

    @classmethod
    def build(cls, *, ticket: Ticket, event: Event) -> 'TicketDocument':
        snapshot = ticket.performance_snapshot
        return cls(
            ticket_id=ticket.id,
            ticket_number=ticket.ticket_number,
            event_title=event.title,
            venue_name=event.venue_name,
            venue_address=event.venue_address,
            performance_date=snapshot.date,
            start_time=snapshot.start_time,
            end_time=snapshot.end_time,
            seat_label=ticket.seat_label,
            category=str(ticket.category),
            price=ticket.price,
            customer_name=ticket.customer.full_name,
            customer_email=ticket.customer.email,
            barcode_data=ticket.barcode_data,
            qr_code_data=ticket.qr_code_data,
        )

    @property
    def attachment_name(self) -> str:
        return f'ticket-{self.ticket_number}.pdf'


@attrs.frozen
class DeliveryJob:
    kind: DeliveryKind
    document: TicketDocument
