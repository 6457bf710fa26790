from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.box_office.domain.entity.inventory_adjustment_entity import InventoryAdjustment
from src.service.box_office.domain.entity.performance_entity import Performance
from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind


class IPerformanceRepo(ABC):
    """
    Performance storage and its inventory counter.

    The inventory methods are single conditional statements; callers never
    read available_tickets and write it back.
    """

    @abstractmethod
    async def get_by_id(self, *, performance_id: int) -> Optional[Performance]:
        pass

    @abstractmethod
    async def create(self, *, performance: Performance) -> Performance:
        pass

    @abstractmethod
    async def update_details(self, *, performance: Performance) -> Performance:
        """Persist schedule/ticket type/flag changes; does not touch inventory"""
        pass

    @abstractmethod
    async def delete(self, *, performance_id: int) -> None:
        pass

    @abstractmethod
    async def decrement_available(
        self,
        *,
        performance_id: int,
        quantity: int,
        kind: InventoryAdjustmentKind,
        actor_id: Optional[int] = None,
    ) -> int:
        """Take quantity units or raise InsufficientInventoryError; returns remaining units"""
        pass

    @abstractmethod
    async def increment_available(
        self,
        *,
        performance_id: int,
        quantity: int,
        kind: InventoryAdjustmentKind,
        actor_id: Optional[int] = None,
    ) -> int:
        """Give back quantity units, capped at total_capacity; returns remaining units"""
        pass

    @abstractmethod
    async def override_available(
        self, *, performance_id: int, value: int, actor_id: int, reason: str
    ) -> int:
        pass

    @abstractmethod
    async def list_adjustments(self, *, performance_id: int) -> List[InventoryAdjustment]:
        pass
