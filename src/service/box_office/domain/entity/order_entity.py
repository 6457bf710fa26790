from datetime import datetime
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import InvalidStateError
from src.platform.logging.loguru_io import Logger
from src.service.box_office.domain.entity.ticket_entity import Ticket
from src.service.box_office.domain.enum.order_status import OrderStatus
from src.service.box_office.domain.value_object.customer_details import CustomerDetails


# target status -> statuses it may be reached from
_ORDER_TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
    OrderStatus.CONFIRMED: (OrderStatus.PENDING,),
    OrderStatus.CANCELLED: (OrderStatus.PENDING, OrderStatus.CONFIRMED),
    OrderStatus.REFUNDED: (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
}


@attrs.define
class Order:
    customer_id: int
    event_id: int
    performance_id: int
    payment_id: int
    total_amount: float
    customer: CustomerDetails
    status: OrderStatus = OrderStatus.CONFIRMED
    tickets: List[Ticket] = attrs.field(factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        customer_id: int,
        event_id: int,
        performance_id: int,
        payment_id: int,
        total_amount: float,
        customer: CustomerDetails,
    ) -> 'Order':
        # Payment is completed before an order exists, so orders start confirmed
        return cls(
            customer_id=customer_id,
            event_id=event_id,
            performance_id=performance_id,
            payment_id=payment_id,
            total_amount=total_amount,
            customer=customer,
            status=OrderStatus.CONFIRMED,
        )

    @Logger.io
    def change_status(self, new_status: OrderStatus) -> bool:
        """Returns False when the order already has new_status"""
        if new_status == self.status:
            return False
        allowed_from = _ORDER_TRANSITIONS.get(new_status, ())
        if self.status not in allowed_from:
            raise InvalidStateError(f'Cannot change order from {self.status} to {new_status}')
        self.status = new_status
        return True
