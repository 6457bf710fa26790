import pytest

from src.platform.exception.exceptions import InvalidStateError, NotFoundError
from src.service.box_office.app.command.update_order_status_use_case import (
    UpdateOrderStatusUseCase,
)
from src.service.box_office.domain.entity.order_entity import Order
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.order_status import OrderStatus
from src.service.box_office.domain.enum.ticket_status import TicketStatus
from test.service.box_office.helpers import CUSTOMER, MANAGER_ID, make_ticket


def _order(status: OrderStatus = OrderStatus.CONFIRMED) -> Order:
    return Order(
        id=55,
        customer_id=7,
        event_id=1,
        performance_id=1,
        payment_id=3,
        total_amount=90.0,
        customer=CUSTOMER,
        status=status,
    )


class TestOrderCascade:
    @pytest.fixture
    def use_case(self, uow):
        uow.order_repo.update_status.side_effect = lambda *, order: order
        uow.performance_repo.increment_available.return_value = 10
        return UpdateOrderStatusUseCase(uow=uow)

    @pytest.mark.asyncio
    async def test_cancelling_an_order_cancels_its_held_tickets(self, use_case, uow):
        """
        Given an order of three tickets, one of them already cancelled
        When the order is cancelled
        Then the other two are cancelled and exactly two units go back
        """
        uow.order_repo.get_by_id.return_value = _order()
        uow.ticket_repo.list_by_order.return_value = [
            make_ticket(ticket_id=1, order_id=55),
            make_ticket(ticket_id=2, order_id=55, status=TicketStatus.USED),
            make_ticket(ticket_id=3, order_id=55, status=TicketStatus.CANCELLED),
        ]

        order = await use_case.update_status(
            order_id=55, new_status=OrderStatus.CANCELLED, actor_id=MANAGER_ID
        )

        assert order.status == OrderStatus.CANCELLED
        assert [t.status for t in order.tickets] == [TicketStatus.CANCELLED] * 3
        assert uow.ticket_repo.update_status.await_count == 2
        uow.performance_repo.increment_available.assert_awaited_once_with(
            performance_id=1,
            quantity=2,
            kind=InventoryAdjustmentKind.CANCELLATION,
            actor_id=MANAGER_ID,
        )
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_refunding_a_confirmed_order(self, use_case, uow):
        uow.order_repo.get_by_id.return_value = _order()
        uow.ticket_repo.list_by_order.return_value = [make_ticket(ticket_id=1, order_id=55)]

        order = await use_case.update_status(order_id=55, new_status=OrderStatus.REFUNDED)

        assert order.tickets[0].status == TicketStatus.REFUNDED
        assert (
            uow.performance_repo.increment_available.await_args.kwargs['kind']
            == InventoryAdjustmentKind.REFUND
        )

    @pytest.mark.asyncio
    async def test_refunding_a_cancelled_order_releases_nothing(self, use_case, uow):
        uow.order_repo.get_by_id.return_value = _order(OrderStatus.CANCELLED)
        uow.ticket_repo.list_by_order.return_value = [
            make_ticket(ticket_id=1, order_id=55, status=TicketStatus.CANCELLED)
        ]

        order = await use_case.update_status(order_id=55, new_status=OrderStatus.REFUNDED)

        assert order.status == OrderStatus.REFUNDED
        assert order.tickets[0].status == TicketStatus.CANCELLED
        uow.performance_repo.increment_available.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_same_status_changes_nothing(self, use_case, uow):
        uow.order_repo.get_by_id.return_value = _order(OrderStatus.CANCELLED)
        uow.ticket_repo.list_by_order.return_value = []

        await use_case.update_status(order_id=55, new_status=OrderStatus.CANCELLED)

        uow.order_repo.update_status.assert_not_awaited()
        assert uow.committed == 0

    @pytest.mark.asyncio
    async def test_refunded_order_cannot_be_confirmed(self, use_case, uow):
        uow.order_repo.get_by_id.return_value = _order(OrderStatus.REFUNDED)
        uow.ticket_repo.list_by_order.return_value = []

        with pytest.raises(InvalidStateError):
            await use_case.update_status(order_id=55, new_status=OrderStatus.CONFIRMED)

    @pytest.mark.asyncio
    async def test_unknown_order(self, use_case, uow):
        uow.order_repo.get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await use_case.update_status(order_id=55, new_status=OrderStatus.CANCELLED)
