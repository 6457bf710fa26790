from abc import ABC, abstractmethod
from typing import Optional

from src.service.box_office.domain.entity.payment_entity import Payment


class IPaymentRepo(ABC):
    @abstractmethod
    async def create(self, *, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get_by_id(self, *, payment_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    async def update(self, *, payment: Payment) -> Payment:
        pass
