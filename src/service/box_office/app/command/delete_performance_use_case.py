from typing import Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.performance_entity import Performance


@attrs.frozen
class PerformanceRemoval:
    performance: Performance
    deleted: bool


class DeletePerformanceUseCase:
    """Tickets keep their performance for audit, so a performance with tickets is only deactivated"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def delete_performance(self, *, performance_id: int) -> PerformanceRemoval:
        async with self.uow:
            performance = await self.uow.performance_repo.get_by_id(performance_id=performance_id)
            if not performance:
                raise NotFoundError('Performance not found')

            issued = await self.uow.ticket_repo.count_by_performance(performance_id=performance_id)
            if issued:
                saved = await self.uow.performance_repo.update_details(
                    performance=performance.deactivate()
                )
                await self.uow.commit()
                Logger.base.info(
                    f'🗃️ [PERFORMANCE] {performance_id} has {issued} tickets, deactivated instead of deleted'
                )
                return PerformanceRemoval(performance=saved, deleted=False)

            await self.uow.performance_repo.delete(performance_id=performance_id)
            await self.uow.commit()
        return PerformanceRemoval(performance=performance, deleted=True)
