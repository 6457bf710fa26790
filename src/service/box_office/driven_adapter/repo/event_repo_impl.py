from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.box_office.app.interface.i_event_repo import IEventRepo
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.driven_adapter.model.event_model import EventModel


class EventRepoImpl(IEventRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_event: EventModel) -> Event:
        return Event(
            id=db_event.id,
            title=db_event.title,
            description=db_event.description,
            venue_name=db_event.venue_name,
            venue_address=db_event.venue_address,
            is_active=db_event.is_active,
            created_at=db_event.created_at,
        )

    @Logger.io
    async def get_by_id(self, *, event_id: int) -> Optional[Event]:
        result = await self.session.execute(select(EventModel).where(EventModel.id == event_id))
        db_event = result.scalar_one_or_none()
        return self._to_entity(db_event) if db_event else None

    @Logger.io
    async def create(self, *, event: Event) -> Event:
        db_event = EventModel(
            title=event.title,
            description=event.description,
            venue_name=event.venue_name,
            venue_address=event.venue_address,
            is_active=event.is_active,
        )
        self.session.add(db_event)
        await self.session.flush()
        await self.session.refresh(db_event)
        return self._to_entity(db_event)
