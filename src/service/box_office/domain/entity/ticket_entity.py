from datetime import datetime, timezone
import secrets
from typing import Optional

import attrs
import orjson

from src.platform.exception.exceptions import DomainError, InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.enum.payment_status import PaymentMethod
from src.service.box_office.domain.enum.ticket_status import (
    TicketCategory,
    TicketPaymentStatus,
    TicketStatus,
)
from src.service.box_office.domain.value_object.customer_details import CustomerDetails
from src.service.box_office.domain.value_object.performance_snapshot import PerformanceSnapshot
from src.service.box_office.domain.value_object.seat_locator import SeatLocator


TICKET_NUMBER_PREFIX = 'TKT-'
_RELEASED = (TicketStatus.CANCELLED, TicketStatus.REFUNDED)


def generate_ticket_number() -> str:
    return f'{TICKET_NUMBER_PREFIX}{secrets.token_hex(6).upper()}'


def build_barcode_data(
    *, ticket_number: str, event_id: int, performance_id: int, seat: Optional[SeatLocator]
) -> str:
    seat_part = f'{seat.section}-{seat.row}-{seat.seat}' if seat else 'GA'
    return f'{ticket_number}-{event_id}-{performance_id}-{seat_part}'


def build_qr_code_data(
    *,
    ticket_number: str,
    event_id: int,
    performance_id: int,
    customer_id: int,
    seat: Optional[SeatLocator],
) -> str:
    payload = {
        'ticket_number': ticket_number,
        'event_id': event_id,
        'performance_id': performance_id,
        'customer_id': customer_id,
        'section': seat.section if seat else None,
        'row': seat.row if seat else None,
        'seat': seat.seat if seat else None,
    }
    return orjson.dumps(payload, option=orjson.OPT_SORT_KEYS).decode()


@attrs.define
class Ticket:
    ticket_number: str
    event_id: int
    performance_id: int
    performance_snapshot: PerformanceSnapshot
    customer_id: int
    customer: CustomerDetails
    price: float
    category: TicketCategory
    seat: Optional[SeatLocator]
    status: TicketStatus
    payment_status: TicketPaymentStatus
    payment_method: PaymentMethod
    payment_id: Optional[int]
    barcode_data: str
    qr_code_data: str
    order_id: Optional[int] = None
    purchase_date: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def issue(
        cls,
        *,
        event_id: int,
        performance_id: int,
        performance_snapshot: PerformanceSnapshot,
        customer_id: int,
        customer: CustomerDetails,
        price: float,
        category: TicketCategory,
        seat: Optional[SeatLocator],
        status: TicketStatus,
        payment_status: TicketPaymentStatus,
        payment_method: PaymentMethod,
        payment_id: Optional[int],
        order_id: Optional[int] = None,
        ticket_number: Optional[str] = None,
    ) -> 'Ticket':
        if status not in (TicketStatus.RESERVED, TicketStatus.PURCHASED):
            raise DomainError(f'Tickets cannot be issued as {status}')
        if price < 0:
            raise DomainError('Ticket price must not be negative')

        number = ticket_number or generate_ticket_number()
        return cls(
            ticket_number=number,
            event_id=event_id,
            performance_id=performance_id,
            performance_snapshot=performance_snapshot,
            customer_id=customer_id,
            customer=customer,
            price=price,
            category=category,
            seat=seat,
            status=status,
            payment_status=payment_status,
            payment_method=payment_method,
            payment_id=payment_id,
            order_id=order_id,
            purchase_date=datetime.now(timezone.utc),
            barcode_data=build_barcode_data(
                ticket_number=number, event_id=event_id, performance_id=performance_id, seat=seat
            ),
            qr_code_data=build_qr_code_data(
                ticket_number=number,
                event_id=event_id,
                performance_id=performance_id,
                customer_id=customer_id,
                seat=seat,
            ),
        )

    @property
    def seat_label(self) -> str:
        return self.seat.label if self.seat else 'General Admission'

    @property
    def is_released(self) -> bool:
        return self.status in _RELEASED

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    @Logger.io
    def transition_to(self, target: TicketStatus) -> 'TicketTransition':
        """Apply a single administrative status change"""
        if target == self.status and target != TicketStatus.CANCELLED:
            return TicketTransition(ticket=self, previous_status=self.status, inventory_delta=0)

        if target == TicketStatus.CANCELLED:
            return self.cancel()
        if target == TicketStatus.REFUNDED:
            return self.refund()
        if target == TicketStatus.USED:
            return self.check_in()
        if self.status == TicketStatus.CANCELLED:
            return self.reactivate(target)
        if target == TicketStatus.PURCHASED and self.status == TicketStatus.RESERVED:
            return self.confirm_payment()
        raise InvalidStateError(f'Cannot change ticket from {self.status} to {target}')

    def cancel(self, *, cascade: bool = False) -> 'TicketTransition':
        """
        Cancel the ticket and give its unit back to inventory.

        Cancelling a cancelled ticket changes nothing. Order cascades also
        release used tickets; a direct cancel only accepts reserved/purchased.
        """
        if self.status == TicketStatus.CANCELLED:
            return TicketTransition(ticket=self, previous_status=self.status, inventory_delta=0)
        allowed = (TicketStatus.RESERVED, TicketStatus.PURCHASED)
        if cascade:
            allowed += (TicketStatus.USED,)
        if self.status not in allowed:
            raise InvalidStateError(f'Cannot cancel a {self.status} ticket')

        payment_status = (
            TicketPaymentStatus.REFUNDED
            if self.payment_status == TicketPaymentStatus.COMPLETED
            else TicketPaymentStatus.CANCELLED
        )
        return self._release(TicketStatus.CANCELLED, payment_status)

    def refund(self, *, cascade: bool = False) -> 'TicketTransition':
        if self.status == TicketStatus.REFUNDED:
            return TicketTransition(ticket=self, previous_status=self.status, inventory_delta=0)
        if cascade:
            if self.status == TicketStatus.CANCELLED:
                raise InvalidStateError('Cancelled tickets are not refunded again')
        elif not (
            self.status == TicketStatus.PURCHASED
            and self.payment_status == TicketPaymentStatus.COMPLETED
        ):
            raise InvalidStateError(
                f'Only purchased tickets with a completed payment can be refunded '
                f'(ticket is {self.status}/{self.payment_status})'
            )
        return self._release(TicketStatus.REFUNDED, TicketPaymentStatus.REFUNDED)

    def _release(
        self, target: TicketStatus, payment_status: TicketPaymentStatus
    ) -> 'TicketTransition':
        previous = self.status
        self.status = target
        self.payment_status = payment_status
        return TicketTransition(
            ticket=self,
            previous_status=previous,
            inventory_delta=1 if previous.occupies_inventory else 0,
        )

    def confirm_payment(self, *, payment_id: Optional[int] = None) -> 'TicketTransition':
        if not (
            self.status == TicketStatus.RESERVED
            and self.payment_status == TicketPaymentStatus.PENDING
        ):
            raise InvalidStateError(
                f'Only reserved tickets awaiting payment can be confirmed '
                f'(ticket is {self.status}/{self.payment_status})'
            )
        previous = self.status
        self.status = TicketStatus.PURCHASED
        self.payment_status = TicketPaymentStatus.COMPLETED
        if payment_id is not None:
            self.payment_id = payment_id
        return TicketTransition(ticket=self, previous_status=previous, inventory_delta=0)

    def check_in(self) -> 'TicketTransition':
        if self.status != TicketStatus.PURCHASED:
            raise InvalidStateError(f'Only purchased tickets can be checked in, ticket is {self.status}')
        self.status = TicketStatus.USED
        return TicketTransition(
            ticket=self, previous_status=TicketStatus.PURCHASED, inventory_delta=0
        )

    def reactivate(self, target: TicketStatus) -> 'TicketTransition':
        """Un-cancel; the caller must re-claim the seat and one unit of inventory"""
        if self.status != TicketStatus.CANCELLED:
            raise InvalidStateError(f'Only cancelled tickets can be reactivated, ticket is {self.status}')
        if target not in (TicketStatus.RESERVED, TicketStatus.PURCHASED):
            raise InvalidStateError(f'Cannot reactivate a ticket as {target}')
        self.status = target
        self.payment_status = (
            TicketPaymentStatus.COMPLETED
            if target == TicketStatus.PURCHASED
            else TicketPaymentStatus.PENDING
        )
        return TicketTransition(
            ticket=self, previous_status=TicketStatus.CANCELLED, inventory_delta=-1
        )


@attrs.frozen
class TicketTransition:
    ticket: Ticket
    previous_status: TicketStatus
    inventory_delta: int

    @property
    def changed(self) -> bool:
        return self.previous_status != self.ticket.status
