"""
Purchase workflow

One payment buys N seats of one performance. Everything from the payment
check to the ticket inserts runs in a single transaction:

1. Payment exists, is completed and not yet bound to an order
2. Event and performance exist and belong together; performance is sellable
3. Quantity fits the remaining inventory, no seat requested twice, no seat held
4. Inventory decrement (conditional UPDATE, first write of the transaction)
5. Order (confirmed) and tickets (purchased / completed)
6. Commit

Delivery jobs are queued only after the commit succeeded.
"""

import time
from typing import List, Self, Tuple

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CustomBaseError,
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    SeatUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.app.dto.ticket_delivery import DeliveryJob, DeliveryKind, TicketDocument
from src.service.box_office.app.interface.i_ticket_delivery_queue import ITicketDeliveryQueue
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.entity.order_entity import Order
from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.ticket_status import TicketPaymentStatus, TicketStatus
from src.service.box_office.domain.value_object.customer_details import CustomerDetails
from src.service.box_office.domain.value_object.seat_locator import SeatSelection


class CreateOrderUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork, delivery_queue: ITicketDeliveryQueue) -> None:
        self.uow = uow
        self.delivery_queue = delivery_queue

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        delivery_queue: ITicketDeliveryQueue = Depends(Provide[Container.ticket_delivery_queue]),
    ) -> Self:
        return cls(uow=uow, delivery_queue=delivery_queue)

    @staticmethod
    def _ensure_distinct_seats(selections: List[SeatSelection]) -> None:
        seen = set()
        for selection in selections:
            if selection.locator is None:
                continue
            if selection.locator in seen:
                raise DomainError(f'Seat {selection.label} was requested more than once')
            seen.add(selection.locator)

    @Logger.io
    async def create_order(
        self,
        *,
        customer_id: int,
        payment_id: int,
        event_id: int,
        performance_id: int,
        selections: List[SeatSelection],
        customer: CustomerDetails,
    ) -> Order:
        started = time.perf_counter()
        try:
            order, event = await self._purchase(
                customer_id=customer_id,
                payment_id=payment_id,
                event_id=event_id,
                performance_id=performance_id,
                selections=selections,
                customer=customer,
            )
        except CustomBaseError as e:
            metrics.record_purchase(result=e.kind, duration=time.perf_counter() - started)
            raise

        metrics.record_purchase(
            result='success', duration=time.perf_counter() - started, tickets=len(order.tickets)
        )
        Logger.base.info(
            f'🎫 [PURCHASE] Order {order.id} issued {len(order.tickets)} tickets '
            f'for performance {performance_id}'
        )

        for ticket in order.tickets:
            self.delivery_queue.enqueue(
                job=DeliveryJob(
                    kind=DeliveryKind.TICKET_CONFIRMATION,
                    document=TicketDocument.build(ticket=ticket, event=event),
                )
            )
        return order

    @retry_on_conflict
    async def _purchase(
        self,
        *,
        customer_id: int,
        payment_id: int,
        event_id: int,
        performance_id: int,
        selections: List[SeatSelection],
        customer: CustomerDetails,
    ) -> Tuple[Order, Event]:
        async with self.uow:
            payment = await self.uow.payment_repo.get_by_id(payment_id=payment_id)
            if not payment:
                raise NotFoundError('Payment not found')
            if payment.customer_id != customer_id:
                raise ForbiddenError('Payment belongs to another customer')
            payment.ensure_usable_for_purchase()
            if await self.uow.order_repo.exists_for_payment(payment_id=payment_id):
                raise InvalidStateError('Payment has already been used for an order')

            event = await self.uow.event_repo.get_by_id(event_id=event_id)
            if not event:
                raise NotFoundError('Event not found')
            performance = await self.uow.performance_repo.get_by_id(performance_id=performance_id)
            if not performance or performance.event_id != event_id:
                raise NotFoundError('Performance not found for this event')

            performance.ensure_can_sell(len(selections))
            self._ensure_distinct_seats(selections)

            locators = [s.locator for s in selections if s.locator is not None]
            held = await self.uow.ticket_repo.find_held_seats(
                performance_id=performance_id, seats=locators
            )
            if held:
                metrics.seat_conflicts.inc(len(held))
                raise SeatUnavailableError([seat.label for seat in held])

            remaining = await self.uow.performance_repo.decrement_available(
                performance_id=performance_id,
                quantity=len(selections),
                kind=InventoryAdjustmentKind.PURCHASE,
                actor_id=customer_id,
            )

            order = await self.uow.order_repo.create(
                order=Order.create(
                    customer_id=customer_id,
                    event_id=event_id,
                    performance_id=performance_id,
                    payment_id=payment_id,
                    total_amount=payment.amount,
                    customer=customer,
                )
            )

            tickets = [
                Ticket.issue(
                    event_id=event_id,
                    performance_id=performance_id,
                    performance_snapshot=performance.snapshot,
                    customer_id=customer_id,
                    customer=customer,
                    price=selection.price,
                    category=selection.category,
                    seat=selection.locator,
                    status=TicketStatus.PURCHASED,
                    payment_status=TicketPaymentStatus.COMPLETED,
                    payment_method=payment.method,
                    payment_id=payment_id,
                    order_id=order.id,
                )
                for selection in selections
            ]
            order.tickets = await self.uow.ticket_repo.create_many(tickets=tickets)

            await self.uow.commit()

        metrics.record_inventory_change(
            performance_id=performance_id, kind=InventoryAdjustmentKind.PURCHASE, available=remaining
        )
        return order, event
