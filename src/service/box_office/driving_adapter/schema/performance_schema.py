import datetime as dt
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.box_office.domain.entity.inventory_adjustment_entity import InventoryAdjustment
from src.service.box_office.domain.entity.performance_entity import Performance
from src.service.box_office.domain.value_object.ticket_type import TicketType


class TicketTypeSchema(BaseModel):
    name: str
    price: float
    available_count: int
    description: str = ''

    def to_value(self) -> TicketType:
        return TicketType(
            name=self.name,
            price=self.price,
            available_count=self.available_count,
            description=self.description,
        )


class PerformanceCreateRequest(BaseModel):
    event_id: int
    date: dt.date
    start_time: str
    end_time: str
    ticket_types: List[TicketTypeSchema]
    notes: str = ''

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'event_id': 1,
                'date': '2025-03-14',
                'start_time': '19:30',
                'end_time': '22:00',
                'ticket_types': [
                    {'name': 'Stalls', 'price': 45.0, 'available_count': 300},
                    {'name': 'Balcony', 'price': 25.0, 'available_count': 120},
                ],
                'notes': 'Opening night',
            }
        }
    )


class PerformanceUpdateRequest(BaseModel):
    """Only provided fields change; once tickets exist only notes and is_active are accepted"""

    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    ticket_types: Optional[List[TicketTypeSchema]] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None
    is_cancelled: Optional[bool] = None


class AvailableTicketsOverrideRequest(BaseModel):
    available_tickets: int = Field(ge=0)
    reason: str

    model_config = ConfigDict(
        json_schema_extra={
            'example': {'available_tickets': 12, 'reason': 'Returned house seats after recount'}
        }
    )


class PerformanceResponse(BaseModel):
    id: int
    event_id: int
    date: dt.date
    start_time: str
    end_time: str
    total_capacity: int
    available_tickets: int
    sold_tickets: int
    percentage_sold: int
    is_sold_out: bool
    is_active: bool
    is_cancelled: bool
    ticket_types: List[TicketTypeSchema]
    notes: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, performance: Performance) -> 'PerformanceResponse':
        if performance.id is None:
            raise ValueError('Performance ID should not be None after persistence.')
        return cls(
            id=performance.id,
            event_id=performance.event_id,
            date=performance.date,
            start_time=performance.start_time,
            end_time=performance.end_time,
            total_capacity=performance.total_capacity,
            available_tickets=performance.available_tickets,
            sold_tickets=performance.sold_tickets,
            percentage_sold=performance.percentage_sold,
            is_sold_out=performance.is_sold_out,
            is_active=performance.is_active,
            is_cancelled=performance.is_cancelled,
            ticket_types=[
                TicketTypeSchema(
                    name=ticket_type.name,
                    price=ticket_type.price,
                    available_count=ticket_type.available_count,
                    description=ticket_type.description,
                )
                for ticket_type in performance.ticket_types
            ],
            notes=performance.notes,
            created_at=performance.created_at,
            updated_at=performance.updated_at,
        )


class PerformanceDeleteResponse(BaseModel):
    id: int
    deleted: bool
    is_active: bool
    message: str


class InventoryAdjustmentResponse(BaseModel):
    id: int
    kind: str
    delta: int
    available_after: int
    actor_id: Optional[int] = None
    reason: str = ''
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, adjustment: InventoryAdjustment) -> 'InventoryAdjustmentResponse':
        return cls(
            id=adjustment.id or 0,
            kind=adjustment.kind.value,
            delta=adjustment.delta,
            available_after=adjustment.available_after,
            actor_id=adjustment.actor_id,
            reason=adjustment.reason,
            created_at=adjustment.created_at,
        )
