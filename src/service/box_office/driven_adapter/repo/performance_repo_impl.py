"""
Performance repository implementation

Inventory changes are single UPDATE ... RETURNING statements. The WHERE clause
carries the precondition (enough units left), so two transactions racing for
the last unit serialize on the row lock and the loser matches zero rows.
"""

from typing import List, Optional

from sqlalchemy import (
    ColumnElement,
    Integer,
    case,
    delete as sql_delete,
    func,
    literal,
    select,
    update as sql_update,
)
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import InsufficientInventoryError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_performance_repo import IPerformanceRepo
from src.service.box_office.domain.entity.inventory_adjustment_entity import InventoryAdjustment
from src.service.box_office.domain.entity.performance_entity import Performance
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.value_object.ticket_type import TicketType
from src.service.box_office.driven_adapter.model.inventory_adjustment_model import (
    InventoryAdjustmentModel,
)
from src.service.box_office.driven_adapter.model.performance_model import PerformanceModel


class PerformanceRepoImpl(IPerformanceRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_performance: PerformanceModel) -> Performance:
        return Performance(
            id=db_performance.id,
            event_id=db_performance.event_id,
            date=db_performance.date,
            start_time=db_performance.start_time,
            end_time=db_performance.end_time,
            total_capacity=db_performance.total_capacity,
            available_tickets=db_performance.available_tickets,
            ticket_types=[TicketType.from_dict(item) for item in db_performance.ticket_types],
            is_active=db_performance.is_active,
            is_cancelled=db_performance.is_cancelled,
            notes=db_performance.notes,
            created_at=db_performance.created_at,
            updated_at=db_performance.updated_at,
        )

    @Logger.io
    async def get_by_id(self, *, performance_id: int) -> Optional[Performance]:
        result = await self.session.execute(
            select(PerformanceModel)
            .where(PerformanceModel.id == performance_id)
            .execution_options(populate_existing=True)
        )
        db_performance = result.scalar_one_or_none()
        return self._to_entity(db_performance) if db_performance else None

    @Logger.io
    async def create(self, *, performance: Performance) -> Performance:
        db_performance = PerformanceModel(
            event_id=performance.event_id,
            date=performance.date,
            start_time=performance.start_time,
            end_time=performance.end_time,
            total_capacity=performance.total_capacity,
            available_tickets=performance.available_tickets,
            is_sold_out=performance.is_sold_out,
            ticket_types=[ticket_type.to_dict() for ticket_type in performance.ticket_types],
            is_active=performance.is_active,
            is_cancelled=performance.is_cancelled,
            notes=performance.notes,
        )
        self.session.add(db_performance)
        await self.session.flush()
        await self.session.refresh(db_performance)
        return self._to_entity(db_performance)

    @Logger.io
    async def update_details(self, *, performance: Performance) -> Performance:
        result = await self.session.execute(
            sql_update(PerformanceModel)
            .where(PerformanceModel.id == performance.id)
            .values(
                date=performance.date,
                start_time=performance.start_time,
                end_time=performance.end_time,
                ticket_types=[ticket_type.to_dict() for ticket_type in performance.ticket_types],
                total_capacity=performance.total_capacity,
                available_tickets=performance.available_tickets,
                is_sold_out=performance.is_sold_out,
                is_active=performance.is_active,
                is_cancelled=performance.is_cancelled,
                notes=performance.notes,
                updated_at=func.now(),
            )
            .returning(PerformanceModel)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        db_performance = result.scalar_one_or_none()
        if not db_performance:
            raise NotFoundError('Performance not found')
        return self._to_entity(db_performance)

    @Logger.io
    async def delete(self, *, performance_id: int) -> None:
        await self.session.execute(
            sql_delete(InventoryAdjustmentModel).where(
                InventoryAdjustmentModel.performance_id == performance_id
            )
        )
        await self.session.execute(
            sql_delete(PerformanceModel).where(PerformanceModel.id == performance_id)
        )

    async def _apply(
        self,
        *,
        performance_id: int,
        new_available: ColumnElement[int],
        precondition: ColumnElement[bool] | None,
    ) -> Optional[int]:
        stmt = (
            sql_update(PerformanceModel)
            .where(PerformanceModel.id == performance_id)
            .values(
                available_tickets=new_available,
                is_sold_out=new_available <= 0,
                updated_at=func.now(),
            )
            .returning(PerformanceModel.available_tickets)
            .execution_options(synchronize_session=False)
        )
        if precondition is not None:
            stmt = stmt.where(precondition)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _record(
        self,
        *,
        performance_id: int,
        kind: InventoryAdjustmentKind,
        delta: int,
        available_after: int,
        actor_id: Optional[int],
        reason: str = '',
    ) -> None:
        self.session.add(
            InventoryAdjustmentModel(
                performance_id=performance_id,
                kind=kind.value,
                delta=delta,
                available_after=available_after,
                actor_id=actor_id,
                reason=reason,
            )
        )
        await self.session.flush()

    async def _current_available(self, *, performance_id: int) -> int:
        result = await self.session.execute(
            select(PerformanceModel.available_tickets).where(PerformanceModel.id == performance_id)
        )
        available = result.scalar_one_or_none()
        if available is None:
            raise NotFoundError('Performance not found')
        return available

    @Logger.io
    async def decrement_available(
        self,
        *,
        performance_id: int,
        quantity: int,
        kind: InventoryAdjustmentKind,
        actor_id: Optional[int] = None,
    ) -> int:
        remaining = await self._apply(
            performance_id=performance_id,
            new_available=PerformanceModel.available_tickets - quantity,
            precondition=PerformanceModel.available_tickets >= quantity,
        )
        if remaining is None:
            available = await self._current_available(performance_id=performance_id)
            raise InsufficientInventoryError(
                f'Only {available} tickets left, {quantity} requested',
                requested=quantity,
                available=available,
            )
        await self._record(
            performance_id=performance_id,
            kind=kind,
            delta=-quantity,
            available_after=remaining,
            actor_id=actor_id,
        )
        return remaining

    @Logger.io
    async def increment_available(
        self,
        *,
        performance_id: int,
        quantity: int,
        kind: InventoryAdjustmentKind,
        actor_id: Optional[int] = None,
    ) -> int:
        raised = PerformanceModel.available_tickets + quantity
        remaining = await self._apply(
            performance_id=performance_id,
            new_available=case(
                (raised > PerformanceModel.total_capacity, PerformanceModel.total_capacity),
                else_=raised,
            ),
            precondition=None,
        )
        if remaining is None:
            raise NotFoundError('Performance not found')
        await self._record(
            performance_id=performance_id,
            kind=kind,
            delta=quantity,
            available_after=remaining,
            actor_id=actor_id,
        )
        return remaining

    @Logger.io
    async def override_available(
        self, *, performance_id: int, value: int, actor_id: int, reason: str
    ) -> int:
        previous = await self._current_available(performance_id=performance_id)
        remaining = await self._apply(
            performance_id=performance_id,
            new_available=literal(value, Integer),
            precondition=PerformanceModel.total_capacity >= value,
        )
        if remaining is None:
            raise InsufficientInventoryError(
                f'Override {value} exceeds the performance capacity', requested=value
            )
        await self._record(
            performance_id=performance_id,
            kind=InventoryAdjustmentKind.MANUAL_OVERRIDE,
            delta=remaining - previous,
            available_after=remaining,
            actor_id=actor_id,
            reason=reason,
        )
        return remaining

    @Logger.io
    async def list_adjustments(self, *, performance_id: int) -> List[InventoryAdjustment]:
        result = await self.session.execute(
            select(InventoryAdjustmentModel)
            .where(InventoryAdjustmentModel.performance_id == performance_id)
            .order_by(InventoryAdjustmentModel.id)
        )
        return [
            InventoryAdjustment(
                id=row.id,
                performance_id=row.performance_id,
                kind=InventoryAdjustmentKind(row.kind),
                delta=row.delta,
                available_after=row.available_after,
                actor_id=row.actor_id,
                reason=row.reason,
                created_at=row.created_at,
            )
            for row in result.scalars().all()
        ]
