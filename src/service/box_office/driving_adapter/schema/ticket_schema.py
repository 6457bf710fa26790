from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.enum.payment_status import PaymentMethod
from src.service.box_office.domain.enum.ticket_status import TicketCategory
from src.service.box_office.domain.value_object.customer_details import CustomerDetails
from src.service.box_office.domain.value_object.seat_locator import SeatLocator


class CustomerDetailsSchema(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr

    def to_value(self) -> CustomerDetails:
        return CustomerDetails(
            first_name=self.first_name, last_name=self.last_name, email=str(self.email)
        )


class SeatSchema(BaseModel):
    section: str = Field(min_length=1)
    row: str = Field(min_length=1)
    seat: str = Field(min_length=1)

    def to_value(self) -> SeatLocator:
        return SeatLocator(section=self.section, row=self.row, seat=self.seat)


class CustomerDetailsView(BaseModel):
    first_name: str
    last_name: str
    email: str


class TicketCreateRequest(BaseModel):
    event_id: int
    performance_id: int
    price: float = Field(ge=0)
    category: TicketCategory = TicketCategory.STANDARD
    seat: Optional[SeatSchema] = None
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    customer: CustomerDetailsSchema

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'event_id': 1,
                'performance_id': 1,
                'price': 45.0,
                'category': 'standard',
                'seat': {'section': 'Stalls', 'row': 'C', 'seat': '12'},
                'payment_method': 'credit_card',
                'customer': {
                    'first_name': 'Ada',
                    'last_name': 'Lovelace',
                    'email': 'ada@example.com',
                },
            }
        }
    )


class TicketStatusUpdateRequest(BaseModel):
    # Plain string so legacy values such as 'active' or 'checked-in' are accepted
    status: str

    model_config = ConfigDict(json_schema_extra={'example': {'status': 'used'}})


class TicketIdsRequest(BaseModel):
    ticket_ids: List[int] = Field(min_length=1)


class ConfirmPaymentRequest(TicketIdsRequest):
    payment_id: int


class TicketResponse(BaseModel):
    id: int
    ticket_number: str
    event_id: int
    performance_id: int
    performance_date: date
    start_time: str
    end_time: str
    customer_id: int
    customer: CustomerDetailsView
    price: float
    category: str
    seat: Optional[SeatSchema] = None
    seat_label: str
    status: str
    payment_status: str
    payment_method: str
    payment_id: Optional[int] = None
    order_id: Optional[int] = None
    barcode_data: str
    qr_code_data: str
    purchase_date: Optional[datetime] = None

    @classmethod
    def from_entity(cls, ticket: Ticket) -> 'TicketResponse':
        if ticket.id is None:
            raise ValueError('Ticket ID should not be None after persistence.')
        return cls(
            id=ticket.id,
            ticket_number=ticket.ticket_number,
            event_id=ticket.event_id,
            performance_id=ticket.performance_id,
            performance_date=ticket.performance_snapshot.date,
            start_time=ticket.performance_snapshot.start_time,
            end_time=ticket.performance_snapshot.end_time,
            customer_id=ticket.customer_id,
            customer=CustomerDetailsView(
                first_name=ticket.customer.first_name,
                last_name=ticket.customer.last_name,
                email=ticket.customer.email,
            ),
            price=ticket.price,
            category=ticket.category.value,
            seat=(
                SeatSchema(section=ticket.seat.section, row=ticket.seat.row, seat=ticket.seat.seat)
                if ticket.seat
                else None
            ),
            seat_label=ticket.seat_label,
            status=ticket.status.value,
            payment_status=ticket.payment_status.value,
            payment_method=ticket.payment_method.value,
            payment_id=ticket.payment_id,
            order_id=ticket.order_id,
            barcode_data=ticket.barcode_data,
            qr_code_data=ticket.qr_code_data,
            purchase_date=ticket.purchase_date,
        )


class TicketEmailResponse(BaseModel):
    ticket_id: int
    queued: bool
