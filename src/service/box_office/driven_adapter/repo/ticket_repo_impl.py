from typing import List, Optional

from sqlalchemy import and_, func, or_, select, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import (
    ConflictRetryableError,
    NotFoundError,
    SeatUnavailableError,
)
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_ticket_repo import ITicketRepo
from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.enum.payment_status import PaymentMethod
from src.service.box_office.domain.enum.ticket_status import (
    TicketCategory,
    TicketPaymentStatus,
    TicketStatus,
)
from src.service.box_office.domain.value_object.customer_details import CustomerDetails
from src.service.box_office.domain.value_object.performance_snapshot import PerformanceSnapshot
from src.service.box_office.domain.value_object.seat_locator import SeatLocator
from src.service.box_office.driven_adapter.model.ticket_model import (
    SEAT_UNIQUE_INDEX_NAME,
    TICKET_NUMBER_UNIQUE_NAME,
    TicketModel,
)


def _is_seat_collision(error: IntegrityError) -> bool:
    # PostgreSQL names the index, SQLite lists the indexed columns
    message = str(error.orig)
    return SEAT_UNIQUE_INDEX_NAME in message or 'ticket.seat_section' in message


class TicketRepoImpl(ITicketRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_ticket: TicketModel) -> Ticket:
        seat = None
        if db_ticket.seat_section is not None:
            seat = SeatLocator(
                section=db_ticket.seat_section,
                row=db_ticket.seat_row or '',
                seat=db_ticket.seat_number or '',
            )
        return Ticket(
            id=db_ticket.id,
            ticket_number=db_ticket.ticket_number,
            event_id=db_ticket.event_id,
            performance_id=db_ticket.performance_id,
            performance_snapshot=PerformanceSnapshot(
                date=db_ticket.performance_date,
                start_time=db_ticket.performance_start_time,
                end_time=db_ticket.performance_end_time,
            ),
            customer_id=db_ticket.customer_id,
            customer=CustomerDetails(
                first_name=db_ticket.customer_first_name,
                last_name=db_ticket.customer_last_name,
                email=db_ticket.customer_email,
            ),
            price=db_ticket.price,
            category=TicketCategory(db_ticket.category),
            seat=seat,
            status=TicketStatus(db_ticket.status),
            payment_status=TicketPaymentStatus(db_ticket.payment_status),
            payment_method=PaymentMethod(db_ticket.payment_method),
            payment_id=db_ticket.payment_id,
            order_id=db_ticket.order_id,
            barcode_data=db_ticket.barcode_data,
            qr_code_data=db_ticket.qr_code_data,
            purchase_date=db_ticket.purchase_date,
            created_at=db_ticket.created_at,
            updated_at=db_ticket.updated_at,
        )

    @staticmethod
    def _to_model(ticket: Ticket) -> TicketModel:
        return TicketModel(
            ticket_number=ticket.ticket_number,
            event_id=ticket.event_id,
            performance_id=ticket.performance_id,
            order_id=ticket.order_id,
            payment_id=ticket.payment_id,
            customer_id=ticket.customer_id,
            customer_first_name=ticket.customer.first_name,
            customer_last_name=ticket.customer.last_name,
            customer_email=ticket.customer.email,
            performance_date=ticket.performance_snapshot.date,
            performance_start_time=ticket.performance_snapshot.start_time,
            performance_end_time=ticket.performance_snapshot.end_time,
            seat_section=ticket.seat.section if ticket.seat else None,
            seat_row=ticket.seat.row if ticket.seat else None,
            seat_number=ticket.seat.seat if ticket.seat else None,
            price=ticket.price,
            category=ticket.category.value,
            status=ticket.status.value,
            payment_status=ticket.payment_status.value,
            payment_method=ticket.payment_method.value,
            barcode_data=ticket.barcode_data,
            qr_code_data=ticket.qr_code_data,
        )

    @Logger.io
    async def get_by_id(self, *, ticket_id: int) -> Optional[Ticket]:
        result = await self.session.execute(
            select(TicketModel)
            .where(TicketModel.id == ticket_id)
            .execution_options(populate_existing=True)
        )
        db_ticket = result.scalar_one_or_none()
        return self._to_entity(db_ticket) if db_ticket else None

    @Logger.io
    async def get_by_ids(self, *, ticket_ids: List[int]) -> List[Ticket]:
        if not ticket_ids:
            return []
        result = await self.session.execute(
            select(TicketModel)
            .where(TicketModel.id.in_(ticket_ids))
            .order_by(TicketModel.id)
            .execution_options(populate_existing=True)
        )
        return [self._to_entity(db_ticket) for db_ticket in result.scalars().all()]

    @Logger.io
    async def list_by_order(self, *, order_id: int) -> List[Ticket]:
        result = await self.session.execute(
            select(TicketModel)
            .where(TicketModel.order_id == order_id)
            .order_by(TicketModel.id)
            .execution_options(populate_existing=True)
        )
        return [self._to_entity(db_ticket) for db_ticket in result.scalars().all()]

    @Logger.io
    async def count_by_performance(self, *, performance_id: int) -> int:
        result = await self.session.execute(
            select(func.count(TicketModel.id)).where(TicketModel.performance_id == performance_id)
        )
        return result.scalar_one()

    @Logger.io
    async def find_held_seats(
        self, *, performance_id: int, seats: List[SeatLocator], exclude_ticket_id: int | None = None
    ) -> List[SeatLocator]:
        if not seats:
            return []
        seat_match = or_(
            *[
                and_(
                    TicketModel.seat_section == seat.section,
                    TicketModel.seat_row == seat.row,
                    TicketModel.seat_number == seat.seat,
                )
                for seat in seats
            ]
        )
        stmt = select(
            TicketModel.seat_section, TicketModel.seat_row, TicketModel.seat_number
        ).where(
            TicketModel.performance_id == performance_id,
            TicketModel.status != TicketStatus.CANCELLED.value,
            seat_match,
        )
        if exclude_ticket_id is not None:
            stmt = stmt.where(TicketModel.id != exclude_ticket_id)
        result = await self.session.execute(stmt)
        held = {(row.seat_section, row.seat_row, row.seat_number) for row in result.all()}
        return [seat for seat in seats if (seat.section, seat.row, seat.seat) in held]

    @Logger.io
    async def create_many(self, *, tickets: List[Ticket]) -> List[Ticket]:
        db_tickets = [self._to_model(ticket) for ticket in tickets]
        self.session.add_all(db_tickets)
        try:
            await self.session.flush()
        except IntegrityError as e:
            message = str(e.orig)
            if 'ticket_number' in message or TICKET_NUMBER_UNIQUE_NAME in message:
                raise ConflictRetryableError('Ticket number collision, please retry') from e
            if _is_seat_collision(e):
                raise SeatUnavailableError(
                    [ticket.seat_label for ticket in tickets if ticket.seat is not None]
                ) from e
            raise

        for db_ticket in db_tickets:
            await self.session.refresh(db_ticket)
        return [self._to_entity(db_ticket) for db_ticket in db_tickets]

    @Logger.io
    async def update_status(self, *, ticket: Ticket, expected_status: TicketStatus) -> Ticket:
        try:
            result = await self.session.execute(
                sql_update(TicketModel)
                .where(
                    TicketModel.id == ticket.id,
                    TicketModel.status == expected_status.value,
                )
                .values(
                    status=ticket.status.value,
                    payment_status=ticket.payment_status.value,
                    payment_id=ticket.payment_id,
                    updated_at=func.now(),
                )
                .returning(TicketModel)
                .execution_options(synchronize_session=False, populate_existing=True)
            )
        except IntegrityError as e:
            # Reactivating onto a seat that was re-sold in the meantime
            if _is_seat_collision(e):
                raise SeatUnavailableError([ticket.seat_label]) from e
            raise
        db_ticket = result.scalar_one_or_none()
        if db_ticket:
            return self._to_entity(db_ticket)

        exists = await self.session.scalar(
            select(TicketModel.id).where(TicketModel.id == ticket.id)
        )
        if exists is None:
            raise NotFoundError('Ticket not found')
        Logger.base.warning(
            f'⚠️ [TICKET] {ticket.ticket_number} is no longer {expected_status}, retrying'
        )
        raise ConflictRetryableError('Ticket status changed concurrently, please retry')
