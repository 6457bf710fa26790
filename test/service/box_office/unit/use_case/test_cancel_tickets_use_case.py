"""
Unit tests for CancelTicketsUseCase

Released units go back with one increment per performance, in the same
transaction as the ticket status writes. Already-cancelled tickets are
skipped so repeating a cancellation never gives a unit back twice.
"""

import pytest

from src.platform.exception.exceptions import (
    DomainError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from src.service.box_office.app.command.cancel_tickets_use_case import CancelTicketsUseCase
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.ticket_status import TicketPaymentStatus, TicketStatus
from test.service.box_office.helpers import (
    CUSTOMER_USER,
    OTHER_CUSTOMER_USER,
    STAFF_USER,
    make_ticket,
)


class TestCancelTickets:
    @pytest.fixture
    def use_case(self, uow):
        uow.performance_repo.increment_available.return_value = 10
        return CancelTicketsUseCase(uow=uow)

    @pytest.mark.asyncio
    async def test_cancel_releases_units_per_performance(self, use_case, uow):
        uow.ticket_repo.get_by_ids.return_value = [
            make_ticket(ticket_id=1, performance_id=1),
            make_ticket(ticket_id=2, performance_id=1),
            make_ticket(ticket_id=3, performance_id=2),
        ]

        tickets = await use_case.cancel_tickets(ticket_ids=[1, 2, 3], requester=CUSTOMER_USER)

        assert [t.status for t in tickets] == [TicketStatus.CANCELLED] * 3
        assert all(t.payment_status == TicketPaymentStatus.REFUNDED for t in tickets)
        calls = uow.performance_repo.increment_available.await_args_list
        assert [(c.kwargs['performance_id'], c.kwargs['quantity']) for c in calls] == [
            (1, 2),
            (2, 1),
        ]
        assert all(c.kwargs['kind'] == InventoryAdjustmentKind.CANCELLATION for c in calls)
        assert uow.committed == 1

    @pytest.mark.asyncio
    async def test_repeated_cancel_gives_nothing_back(self, use_case, uow):
        uow.ticket_repo.get_by_ids.return_value = [
            make_ticket(ticket_id=1, status=TicketStatus.CANCELLED)
        ]

        tickets = await use_case.cancel_tickets(ticket_ids=[1], requester=CUSTOMER_USER)

        assert tickets[0].status == TicketStatus.CANCELLED
        uow.ticket_repo.update_status.assert_not_awaited()
        uow.performance_repo.increment_available.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_ids_are_cancelled_once(self, use_case, uow):
        uow.ticket_repo.get_by_ids.return_value = [make_ticket(ticket_id=1)]

        await use_case.cancel_tickets(ticket_ids=[1, 1], requester=CUSTOMER_USER)

        uow.ticket_repo.get_by_ids.assert_awaited_once_with(ticket_ids=[1])
        uow.performance_repo.increment_available.assert_awaited_once()
        assert uow.performance_repo.increment_available.await_args.kwargs['quantity'] == 1

    @pytest.mark.asyncio
    async def test_someone_elses_ticket(self, use_case, uow):
        uow.ticket_repo.get_by_ids.return_value = [make_ticket(ticket_id=1)]

        with pytest.raises(ForbiddenError):
            await use_case.cancel_tickets(ticket_ids=[1], requester=OTHER_CUSTOMER_USER)

        uow.ticket_repo.update_status.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_staff_cancel_on_behalf_of_customer(self, use_case, uow):
        uow.ticket_repo.get_by_ids.return_value = [make_ticket(ticket_id=1)]

        await use_case.cancel_tickets(ticket_ids=[1], requester=STAFF_USER)

        assert uow.performance_repo.increment_available.await_args.kwargs['actor_id'] == STAFF_USER.id

    @pytest.mark.asyncio
    async def test_one_used_ticket_blocks_the_whole_batch(self, use_case, uow):
        uow.ticket_repo.get_by_ids.return_value = [
            make_ticket(ticket_id=1),
            make_ticket(ticket_id=2, status=TicketStatus.USED),
        ]

        with pytest.raises(InvalidStateError):
            await use_case.cancel_tickets(ticket_ids=[1, 2], requester=CUSTOMER_USER)

        uow.ticket_repo.update_status.assert_not_awaited()
        assert uow.committed == 0

    @pytest.mark.asyncio
    async def test_failed_payment_ticket_cannot_be_cancelled(self, use_case, uow):
        uow.ticket_repo.get_by_ids.return_value = [
            make_ticket(
                ticket_id=1,
                status=TicketStatus.RESERVED,
                payment_status=TicketPaymentStatus.FAILED,
            )
        ]

        with pytest.raises(InvalidStateError):
            await use_case.cancel_tickets(ticket_ids=[1], requester=CUSTOMER_USER)

    @pytest.mark.asyncio
    async def test_unknown_ticket(self, use_case, uow):
        uow.ticket_repo.get_by_ids.return_value = [make_ticket(ticket_id=1)]

        with pytest.raises(NotFoundError):
            await use_case.cancel_tickets(ticket_ids=[1, 9], requester=CUSTOMER_USER)

    @pytest.mark.asyncio
    async def test_empty_request(self, use_case):
        with pytest.raises(DomainError):
            await use_case.cancel_tickets(ticket_ids=[], requester=CUSTOMER_USER)
