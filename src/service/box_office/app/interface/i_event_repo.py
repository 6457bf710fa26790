from abc import ABC, abstractmethod
from typing import Optional

from src.service.box_office.domain.entity.event_entity import Event


class IEventRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, event_id: int) -> Optional[Event]:
        pass

    @abstractmethod
    async def create(self, *, event: Event) -> Event:
        pass
