"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.box_office.driven_adapter.model.event_model import EventModel
from src.service.box_office.driven_adapter.model.inventory_adjustment_model import (
    InventoryAdjustmentModel,
)
from src.service.box_office.driven_adapter.model.order_model import OrderModel
from src.service.box_office.driven_adapter.model.payment_model import PaymentModel
from src.service.box_office.driven_adapter.model.performance_model import PerformanceModel
from src.service.box_office.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'EventModel',
    'InventoryAdjustmentModel',
    'OrderModel',
    'PaymentModel',
    'PerformanceModel',
    'TicketModel',
]
