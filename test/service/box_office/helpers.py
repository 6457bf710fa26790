"""Builders for box office entities and seeded database rows"""

from datetime import date
from typing import Optional

from src.platform.database.db_setting import get_session_maker
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.entity.payment_entity import Payment
from src.service.box_office.domain.entity.performance_entity import Performance
from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.entity.user_entity import UserEntity, UserRole
from src.service.box_office.domain.enum.payment_status import PaymentMethod, PaymentStatus
from src.service.box_office.domain.enum.ticket_status import (
    TicketCategory,
    TicketPaymentStatus,
    TicketStatus,
)
from src.service.box_office.domain.value_object.customer_details import CustomerDetails
from src.service.box_office.domain.value_object.performance_snapshot import PerformanceSnapshot
from src.service.box_office.domain.value_object.seat_locator import SeatLocator, SeatSelection
from src.service.box_office.domain.value_object.ticket_type import TicketType


CUSTOMER_ID = 7
OTHER_CUSTOMER_ID = 8
STAFF_ID = 100
MANAGER_ID = 200
ADMIN_ID = 300

PERFORMANCE_DATE = date(2025, 3, 14)
CUSTOMER = CustomerDetails(first_name='Ada', last_name='Lovelace', email='ada@example.com')


def make_performance(
    *,
    capacity: int = 10,
    available: Optional[int] = None,
    performance_id: Optional[int] = 1,
    event_id: int = 1,
    is_active: bool = True,
    is_cancelled: bool = False,
) -> Performance:
    return Performance(
        id=performance_id,
        event_id=event_id,
        date=PERFORMANCE_DATE,
        start_time='19:30',
        end_time='22:00',
        total_capacity=capacity,
        available_tickets=capacity if available is None else available,
        ticket_types=[TicketType(name='Stalls', price=45.0, available_count=capacity)],
        is_active=is_active,
        is_cancelled=is_cancelled,
    )


def make_ticket(
    *,
    ticket_id: Optional[int] = 1,
    status: TicketStatus = TicketStatus.PURCHASED,
    payment_status: TicketPaymentStatus = TicketPaymentStatus.COMPLETED,
    seat: Optional[SeatLocator] = None,
    customer_id: int = CUSTOMER_ID,
    performance_id: int = 1,
    order_id: Optional[int] = None,
    payment_id: Optional[int] = 1,
) -> Ticket:
    ticket = Ticket.issue(
        event_id=1,
        performance_id=performance_id,
        performance_snapshot=PerformanceSnapshot(
            date=PERFORMANCE_DATE, start_time='19:30', end_time='22:00'
        ),
        customer_id=customer_id,
        customer=CUSTOMER,
        price=45.0,
        category=TicketCategory.STANDARD,
        seat=seat,
        status=TicketStatus.PURCHASED if status != TicketStatus.RESERVED else status,
        payment_status=payment_status,
        payment_method=PaymentMethod.CREDIT_CARD,
        payment_id=payment_id,
        order_id=order_id,
    )
    ticket.id = ticket_id
    ticket.status = status
    return ticket


def seat(section: str, row: str, number: str, *, price: float = 45.0) -> SeatSelection:
    return SeatSelection(
        price=price, locator=SeatLocator(section=section, row=row, seat=number)
    )


def general_admission(*, price: float = 30.0) -> SeatSelection:
    return SeatSelection(price=price)


# =============================================================================
# Seeded rows (integration tests)
# =============================================================================
def new_uow() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(get_session_maker())


async def seed_event(*, title: str = 'The Tempest') -> Event:
    uow = new_uow()
    async with uow:
        event = await uow.event_repo.create(
            event=Event(title=title, venue_name='Main House', venue_address='1 Riverside')
        )
        await uow.commit()
    return event


async def seed_performance(*, event_id: int, capacity: int = 10) -> Performance:
    uow = new_uow()
    async with uow:
        performance = await uow.performance_repo.create(
            performance=Performance.create(
                event_id=event_id,
                date=PERFORMANCE_DATE,
                start_time='19:30',
                end_time='22:00',
                ticket_types=[TicketType(name='Stalls', price=45.0, available_count=capacity)],
            )
        )
        await uow.commit()
    return performance


async def seed_payment(
    *,
    customer_id: int = CUSTOMER_ID,
    amount: float = 90.0,
    status: PaymentStatus = PaymentStatus.COMPLETED,
) -> Payment:
    uow = new_uow()
    async with uow:
        payment = await uow.payment_repo.create(
            payment=Payment.create(
                customer_id=customer_id, amount=amount, method=PaymentMethod.CREDIT_CARD
            )
        )
        if status == PaymentStatus.COMPLETED:
            payment = await uow.payment_repo.update(
                payment=payment.complete(transaction_reference=f'PAY_TEST_{payment.id}')
            )
        elif status != PaymentStatus.PROCESSING:
            payment = await uow.payment_repo.update(
                payment=Payment(
                    id=payment.id,
                    customer_id=payment.customer_id,
                    amount=payment.amount,
                    method=payment.method,
                    status=status,
                )
            )
        await uow.commit()
    return payment


async def load_performance(performance_id: int) -> Performance:
    uow = new_uow()
    async with uow:
        performance = await uow.performance_repo.get_by_id(performance_id=performance_id)
    assert performance is not None
    return performance


async def load_ticket(ticket_id: int) -> Ticket:
    uow = new_uow()
    async with uow:
        ticket = await uow.ticket_repo.get_by_id(ticket_id=ticket_id)
    assert ticket is not None
    return ticket


# =============================================================================
# Callers
# =============================================================================
CUSTOMER_USER = UserEntity(id=CUSTOMER_ID, role=UserRole.CUSTOMER, email='ada@example.com')
OTHER_CUSTOMER_USER = UserEntity(id=OTHER_CUSTOMER_ID, role=UserRole.CUSTOMER)
STAFF_USER = UserEntity(id=STAFF_ID, role=UserRole.STAFF, name='Front desk')
MANAGER_USER = UserEntity(id=MANAGER_ID, role=UserRole.MANAGER, name='House manager')
ADMIN_USER = UserEntity(id=ADMIN_ID, role=UserRole.ADMIN, name='Administrator')
