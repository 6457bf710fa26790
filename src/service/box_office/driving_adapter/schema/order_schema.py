from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.box_office.domain.entity.order_entity import Order
from src.service.box_office.domain.enum.order_status import OrderStatus
from src.service.box_office.domain.enum.ticket_status import TicketCategory
from src.service.box_office.domain.value_object.seat_locator import SeatLocator, SeatSelection
from src.service.box_office.driving_adapter.schema.ticket_schema import (
    CustomerDetailsSchema,
    CustomerDetailsView,
    TicketResponse,
)


class SeatSelectionSchema(BaseModel):
    """Omit section/row/seat together for a general admission ticket"""

    section: Optional[str] = None
    row: Optional[str] = None
    seat: Optional[str] = None
    price: float = Field(ge=0)
    category: TicketCategory = TicketCategory.STANDARD

    def to_value(self) -> SeatSelection:
        parts = (self.section, self.row, self.seat)
        if all(parts):
            locator = SeatLocator(section=self.section, row=self.row, seat=self.seat)  # type: ignore[arg-type]
        elif any(parts):
            raise ValueError('section, row and seat must be given together')
        else:
            locator = None
        return SeatSelection(price=self.price, category=self.category, locator=locator)


class OrderCreateRequest(BaseModel):
    payment_id: int
    event_id: int
    performance_id: int
    seats: List[SeatSelectionSchema] = Field(min_length=1)
    customer: CustomerDetailsSchema

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'payment_id': 1,
                'event_id': 1,
                'performance_id': 1,
                'seats': [
                    {'section': 'Stalls', 'row': 'C', 'seat': '12', 'price': 45.0},
                    {'section': 'Stalls', 'row': 'C', 'seat': '13', 'price': 45.0},
                ],
                'customer': {
                    'first_name': 'Ada',
                    'last_name': 'Lovelace',
                    'email': 'ada@example.com',
                },
            }
        }
    )


class OrderStatusUpdateRequest(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    id: int
    customer_id: int
    event_id: int
    performance_id: int
    payment_id: int
    total_amount: float
    status: str
    customer: CustomerDetailsView
    tickets: List[TicketResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, order: Order) -> 'OrderResponse':
        if order.id is None:
            raise ValueError('Order ID should not be None after creation.')
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            event_id=order.event_id,
            performance_id=order.performance_id,
            payment_id=order.payment_id,
            total_amount=order.total_amount,
            status=order.status.value,
            customer=CustomerDetailsView(
                first_name=order.customer.first_name,
                last_name=order.customer.last_name,
                email=order.customer.email,
            ),
            tickets=[TicketResponse.from_entity(ticket) for ticket in order.tickets],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
