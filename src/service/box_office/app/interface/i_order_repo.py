from abc import ABC, abstractmethod
from typing import Optional

from src.service.box_office.domain.entity.order_entity import Order


class IOrderRepo(ABC):
    @abstractmethod
    async def create(self, *, order: Order) -> Order:
        pass

    @abstractmethod
    async def get_by_id(self, *, order_id: int) -> Optional[Order]:
        pass

    @abstractmethod
    async def exists_for_payment(self, *, payment_id: int) -> bool:
        pass

    @abstractmethod
    async def update_status(self, *, order: Order) -> Order:
        pass
