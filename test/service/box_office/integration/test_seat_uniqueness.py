"""
Integration tests for the seat uniqueness index

(performance_id, section, row, seat) is unique among tickets whose status is
not cancelled. Refunded tickets keep their claim; general admission tickets
have no seat and never collide. Status writes only apply to the status they
were read with.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import (
    ConflictRetryableError,
    NotFoundError,
    SeatUnavailableError,
)
from src.service.box_office.domain.enum.ticket_status import TicketStatus
from src.service.box_office.domain.value_object.seat_locator import SeatLocator
from test.service.box_office.helpers import make_ticket, new_uow


A1 = SeatLocator(section='Stalls', row='A', seat='1')


async def _insert(ticket):
    uow = new_uow()
    async with uow:
        [created] = await uow.ticket_repo.create_many(tickets=[ticket])
        await uow.commit()
    return created


async def _set_status(ticket, status: TicketStatus):
    previous = ticket.status
    ticket.status = status
    uow = new_uow()
    async with uow:
        saved = await uow.ticket_repo.update_status(ticket=ticket, expected_status=previous)
        await uow.commit()
    return saved


@pytest.mark.integration
class TestSeatUniqueness:
    @pytest.fixture
    def new_ticket(self, seeded_performance):
        event, performance = seeded_performance

        def _new(seat=A1):
            ticket = make_ticket(
                ticket_id=None, seat=seat, performance_id=performance.id, payment_id=None
            )
            ticket.event_id = event.id
            return ticket

        return _new

    @pytest.mark.asyncio
    async def test_second_active_ticket_for_a_seat_is_rejected(self, new_ticket):
        await _insert(new_ticket())

        with pytest.raises(SeatUnavailableError) as exc_info:
            await _insert(new_ticket())

        assert exc_info.value.unavailable_seats == ['Stalls - Row A, Seat 1']

    @pytest.mark.asyncio
    async def test_cancelled_ticket_frees_the_seat(self, new_ticket):
        first = await _insert(new_ticket())
        await _set_status(first, TicketStatus.CANCELLED)

        second = await _insert(new_ticket())

        assert second.seat == A1
        assert second.id != first.id

    @pytest.mark.asyncio
    async def test_refunded_ticket_keeps_the_seat(self, new_ticket):
        first = await _insert(new_ticket())
        await _set_status(first, TicketStatus.REFUNDED)

        with pytest.raises(SeatUnavailableError):
            await _insert(new_ticket())

    @pytest.mark.asyncio
    async def test_reactivating_onto_a_resold_seat_is_rejected(self, new_ticket):
        first = await _insert(new_ticket())
        await _set_status(first, TicketStatus.CANCELLED)
        await _insert(new_ticket())

        with pytest.raises(SeatUnavailableError):
            await _set_status(first, TicketStatus.PURCHASED)

    @pytest.mark.asyncio
    async def test_general_admission_tickets_never_collide(self, new_ticket):
        first = await _insert(new_ticket(seat=None))
        second = await _insert(new_ticket(seat=None))

        assert first.seat is None and second.seat is None
        uow = new_uow()
        async with uow:
            held = await uow.ticket_repo.find_held_seats(
                performance_id=first.performance_id, seats=[A1]
            )
        assert held == []

    @pytest.mark.asyncio
    async def test_find_held_seats_ignores_cancelled(self, new_ticket):
        first = await _insert(new_ticket())
        uow = new_uow()
        async with uow:
            assert await uow.ticket_repo.find_held_seats(
                performance_id=first.performance_id, seats=[A1]
            ) == [A1]
            assert (
                await uow.ticket_repo.find_held_seats(
                    performance_id=first.performance_id, seats=[A1], exclude_ticket_id=first.id
                )
                == []
            )

        await _set_status(first, TicketStatus.CANCELLED)
        uow = new_uow()
        async with uow:
            assert (
                await uow.ticket_repo.find_held_seats(
                    performance_id=first.performance_id, seats=[A1]
                )
                == []
            )

    @pytest.mark.asyncio
    async def test_other_integrity_errors_are_not_reported_as_seat_conflicts(self, new_ticket):
        orphan = new_ticket()
        orphan.performance_id = 999_999

        with pytest.raises(IntegrityError):
            await _insert(orphan)


@pytest.mark.integration
class TestConditionalStatusWrite:
    @pytest.fixture
    async def stored_ticket(self, seeded_performance):
        event, performance = seeded_performance
        ticket = make_ticket(ticket_id=None, performance_id=performance.id, payment_id=None)
        ticket.event_id = event.id
        return await _insert(ticket)

    @pytest.mark.asyncio
    async def test_write_applies_when_status_is_unchanged(self, stored_ticket):
        saved = await _set_status(stored_ticket, TicketStatus.CANCELLED)

        assert saved.status == TicketStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_stale_write_raises_retryable_conflict(self, stored_ticket):
        """
        Given: a ticket read as purchased
        When: another writer cancels it before this writer saves
        Then: the stale write matches nothing and asks for a retry
        """
        stale_copy = make_ticket(
            ticket_id=stored_ticket.id, performance_id=stored_ticket.performance_id
        )
        await _set_status(stored_ticket, TicketStatus.CANCELLED)

        stale_copy.status = TicketStatus.CANCELLED
        uow = new_uow()
        with pytest.raises(ConflictRetryableError):
            async with uow:
                await uow.ticket_repo.update_status(
                    ticket=stale_copy, expected_status=TicketStatus.PURCHASED
                )

        uow = new_uow()
        async with uow:
            stored = await uow.ticket_repo.get_by_id(ticket_id=stored_ticket.id)
        assert stored.status == TicketStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_write_for_unknown_ticket_is_not_found(self, stored_ticket):
        ghost = make_ticket(ticket_id=999_999, performance_id=stored_ticket.performance_id)

        uow = new_uow()
        with pytest.raises(NotFoundError):
            async with uow:
                await uow.ticket_repo.update_status(
                    ticket=ghost, expected_status=TicketStatus.PURCHASED
                )
