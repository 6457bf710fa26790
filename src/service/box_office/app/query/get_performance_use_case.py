from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.inventory_adjustment_entity import InventoryAdjustment
from src.service.box_office.domain.entity.performance_entity import Performance


class GetPerformanceUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls, uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work])
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def get_performance(self, *, performance_id: int) -> Performance:
        async with self.uow:
            performance = await self.uow.performance_repo.get_by_id(performance_id=performance_id)
        if not performance:
            raise NotFoundError('Performance not found')
        return performance

    @Logger.io
    async def list_adjustments(self, *, performance_id: int) -> List[InventoryAdjustment]:
        async with self.uow:
            if not await self.uow.performance_repo.get_by_id(performance_id=performance_id):
                raise NotFoundError('Performance not found')
            return await self.uow.performance_repo.list_adjustments(performance_id=performance_id)
