from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.performance_entity import Performance
from src.service.box_office.domain.value_object.ticket_type import TicketType


class UpdatePerformanceUseCase:
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
    async def update_performance(
        self,
        *,
        performance_id: int,
        date: Optional[date] = None,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        ticket_types: Optional[List[TicketType]] = None,
        notes: Optional[str] = None,
        is_active: Optional[bool] = None,
        is_cancelled: Optional[bool] = None,
    ) -> Performance:
        async with self.uow:
            performance = await self.uow.performance_repo.get_by_id(performance_id=performance_id)
            if not performance:
                raise NotFoundError('Performance not found')
            issued = await self.uow.ticket_repo.count_by_performance(performance_id=performance_id)

            updated = performance.apply_changes(
                has_tickets=issued > 0,
                date=date,
                start_time=start_time,
                end_time=end_time,
                ticket_types=ticket_types,
                notes=notes,
                is_active=is_active,
                is_cancelled=is_cancelled,
            )
            saved = await self.uow.performance_repo.update_details(performance=updated)
            await self.uow.commit()
        return saved
