"""Box Office Domain Enums"""

from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.order_status import OrderStatus
from src.service.box_office.domain.enum.payment_status import PaymentMethod, PaymentStatus
from src.service.box_office.domain.enum.ticket_status import (
    TicketCategory,
    TicketPaymentStatus,
    TicketStatus,
)

__all__ = [
    'InventoryAdjustmentKind',
    'OrderStatus',
    'PaymentMethod',
    'PaymentStatus',
    'TicketCategory',
    'TicketPaymentStatus',
    'TicketStatus',
]
