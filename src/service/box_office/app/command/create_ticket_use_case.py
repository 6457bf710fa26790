"""
Single reserved ticket

The older one-seat booking path: the ticket is held as reserved with a
pending payment and takes one unit of inventory straight away. Payment is
attached later through the confirm-payment use case.
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, SeatUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.payment_status import PaymentMethod
from src.service.box_office.domain.enum.ticket_status import (
    TicketCategory,
    TicketPaymentStatus,
    TicketStatus,
)
from src.service.box_office.domain.value_object.customer_details import CustomerDetails
from src.service.box_office.domain.value_object.seat_locator import SeatLocator


class CreateTicketUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    @retry_on_conflict
    async def create_ticket(
        self,
        *,
        customer_id: int,
        customer: CustomerDetails,
        event_id: int,
        performance_id: int,
        price: float,
        category: TicketCategory = TicketCategory.STANDARD,
        seat: Optional[SeatLocator] = None,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
    ) -> Ticket:
        async with self.uow:
            if not await self.uow.event_repo.get_by_id(event_id=event_id):
                raise NotFoundError('Event not found')
            performance = await self.uow.performance_repo.get_by_id(performance_id=performance_id)
            if not performance or performance.event_id != event_id:
                raise NotFoundError('Performance not found for this event')
            performance.ensure_can_sell(1)

            if seat is not None:
                held = await self.uow.ticket_repo.find_held_seats(
                    performance_id=performance_id, seats=[seat]
                )
                if held:
                    metrics.seat_conflicts.inc()
                    raise SeatUnavailableError([seat.label], 'This seat is already taken')

            available = await self.uow.performance_repo.decrement_available(
                performance_id=performance_id,
                quantity=1,
                kind=InventoryAdjustmentKind.RESERVATION,
                actor_id=customer_id,
            )

            ticket = Ticket.issue(
                event_id=event_id,
                performance_id=performance_id,
                performance_snapshot=performance.snapshot,
                customer_id=customer_id,
                customer=customer,
                price=price,
                category=category,
                seat=seat,
                status=TicketStatus.RESERVED,
                payment_status=TicketPaymentStatus.PENDING,
                payment_method=payment_method,
                payment_id=None,
            )
            [created] = await self.uow.ticket_repo.create_many(tickets=[ticket])
            await self.uow.commit()

        metrics.record_inventory_change(
            performance_id=performance_id,
            kind=InventoryAdjustmentKind.RESERVATION,
            available=available,
        )
        metrics.tickets_issued.labels(status=TicketStatus.RESERVED).inc()
        return created
