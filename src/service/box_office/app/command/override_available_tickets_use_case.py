"""
Manual inventory override

Kept apart from the purchase and cancellation workflows: it writes a
manual_override row to the inventory ledger with the acting admin and a
reason, and logs at WARNING so overrides stand out from workflow traffic.
"""

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.transaction_retry import retry_on_conflict
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.box_office_metrics import metrics
from src.service.box_office.domain.entity.performance_entity import Performance
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind


class OverrideAvailableTicketsUseCase:
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
    async def override(
        self, *, performance_id: int, value: int, actor_id: int, reason: str
    ) -> Performance:
        if not reason.strip():
            raise DomainError('A reason is required for a manual inventory override')

        async with self.uow:
            performance = await self.uow.performance_repo.get_by_id(performance_id=performance_id)
            if not performance:
                raise NotFoundError('Performance not found')
            performance.validate_override(value)

            available = await self.uow.performance_repo.override_available(
                performance_id=performance_id, value=value, actor_id=actor_id, reason=reason
            )
            updated = await self.uow.performance_repo.get_by_id(performance_id=performance_id)
            if not updated:
                raise NotFoundError('Performance not found')
            await self.uow.commit()

        Logger.base.warning(
            f'✋ [INVENTORY] Manual override on performance {performance_id}: '
            f'{performance.available_tickets} -> {available} by user {actor_id} ({reason})'
        )
        metrics.record_inventory_change(
            performance_id=performance_id,
            kind=InventoryAdjustmentKind.MANUAL_OVERRIDE,
            available=available,
        )
        return updated
