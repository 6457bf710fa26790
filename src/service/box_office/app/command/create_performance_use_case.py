from datetime import date
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.performance_entity import Performance
from src.service.box_office.domain.value_object.ticket_type import TicketType


class CreatePerformanceUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def create_performance(
        self,
        *,
        event_id: int,
        date: date,
        start_time: str,
        end_time: str,
        ticket_types: List[TicketType],
        notes: str = '',
    ) -> Performance:
        performance = Performance.create(
            event_id=event_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            ticket_types=ticket_types,
            notes=notes,
        )
        async with self.uow:
            if not await self.uow.event_repo.get_by_id(event_id=event_id):
                raise NotFoundError('Event not found')
            created = await self.uow.performance_repo.create(performance=performance)
            await self.uow.commit()
        return created
