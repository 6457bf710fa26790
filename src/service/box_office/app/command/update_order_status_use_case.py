"""
Order status change with cascade

cancelled / refunded cascade to every member ticket that still holds its
unit; the released units go back to inventory in one increment per
performance, inside the same transaction as the status writes. An order
moving cancelled -> refunded releases nothing: its tickets were already
released by the cancellation.
"""

from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.service.inventory_release import restore_inventory
from src.service.box_office.domain.entity.order_entity import Order
from src.service.box_office.domain.entity.ticket_entity import TicketTransition
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.order_status import OrderStatus


class UpdateOrderStatusUseCase:
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
    async def update_status(
        self, *, order_id: int, new_status: OrderStatus, actor_id: int | None = None
    ) -> Order:
        async with self.uow:
            order = await self.uow.order_repo.get_by_id(order_id=order_id)
            if not order:
                raise NotFoundError('Order not found')
            order.tickets = await self.uow.ticket_repo.list_by_order(order_id=order_id)

            if not order.change_status(new_status):
                return order

            transitions: List[TicketTransition] = []
            if new_status in (OrderStatus.CANCELLED, OrderStatus.REFUNDED):
                for ticket in order.tickets:
                    if ticket.is_released:
                        continue
                    if new_status == OrderStatus.CANCELLED:
                        transitions.append(ticket.cancel(cascade=True))
                    else:
                        transitions.append(ticket.refund(cascade=True))

            updated_tickets = {}
            for transition in transitions:
                saved_ticket = await self.uow.ticket_repo.update_status(
                    ticket=transition.ticket, expected_status=transition.previous_status
                )
                updated_tickets[saved_ticket.id] = saved_ticket
            kind = (
                InventoryAdjustmentKind.CANCELLATION
                if new_status == OrderStatus.CANCELLED
                else InventoryAdjustmentKind.REFUND
            )
            await restore_inventory(
                uow=self.uow, transitions=transitions, kind=kind, actor_id=actor_id
            )

            saved = await self.uow.order_repo.update_status(order=order)
            saved.tickets = [updated_tickets.get(t.id, t) for t in order.tickets]
            await self.uow.commit()

        Logger.base.info(
            f'📦 [ORDER] Order {order_id} -> {new_status}, {len(transitions)} tickets released'
        )
        return saved
