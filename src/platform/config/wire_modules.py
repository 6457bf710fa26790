"""
Wire Modules Configuration

Modules whose `@inject` functions resolve `Provide[...]` markers. Shared
between the production app and the test client.
"""

from types import ModuleType

from src.service.box_office.app.command import (
    cancel_tickets_use_case,
    confirm_ticket_payment_use_case,
    create_order_use_case,
    create_payment_use_case,
    create_performance_use_case,
    create_ticket_use_case,
    delete_performance_use_case,
    override_available_tickets_use_case,
    send_ticket_email_use_case,
    update_order_status_use_case,
    update_payment_status_use_case,
    update_performance_use_case,
    update_ticket_status_use_case,
)
from src.service.box_office.app.query import (
    get_order_use_case,
    get_payment_use_case,
    get_performance_use_case,
    get_ticket_use_case,
    render_ticket_pdf_use_case,
)
from src.service.box_office.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    # payment
    create_payment_use_case,
    update_payment_status_use_case,
    get_payment_use_case,
    # performance
    create_performance_use_case,
    update_performance_use_case,
    delete_performance_use_case,
    override_available_tickets_use_case,
    get_performance_use_case,
    # order
    create_order_use_case,
    update_order_status_use_case,
    get_order_use_case,
    # ticket
    create_ticket_use_case,
    update_ticket_status_use_case,
    cancel_tickets_use_case,
    confirm_ticket_payment_use_case,
    send_ticket_email_use_case,
    get_ticket_use_case,
    render_ticket_pdf_use_case,
    # auth
    role_auth,
]
