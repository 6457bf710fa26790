"""
Box office fixtures

Shared by unit tests, async integration tests and the HTTP/BDD tests. The
database fixtures (`clean_database`, `client`) live in test/conftest.py.
"""

from typing import Any, Dict, Tuple
from unittest.mock import MagicMock

import pytest

from src.service.box_office.app.service.ticket_delivery_queue import TicketDeliveryQueue
from src.service.box_office.domain.entity.event_entity import Event
from src.service.box_office.domain.entity.performance_entity import Performance
from src.service.box_office.driven_adapter.notification.mock_email_sender import MockEmailSender
from test.service.box_office.helpers import seed_event, seed_performance


FAKE_PDF = b'%PDF-1.4 fake ticket'


@pytest.fixture
def mock_email_sender() -> MockEmailSender:
    return MockEmailSender(debug=False)


@pytest.fixture
def fake_pdf_renderer() -> MagicMock:
    renderer = MagicMock()
    renderer.render.return_value = FAKE_PDF
    return renderer


@pytest.fixture
def delivery_queue(
    mock_email_sender: MockEmailSender, fake_pdf_renderer: MagicMock
) -> TicketDeliveryQueue:
    return TicketDeliveryQueue(
        email_sender=mock_email_sender,
        pdf_renderer=fake_pdf_renderer,
        box_office_name='Test Box Office',
        max_buffer_size=50,
        max_attempts=3,
        retry_delay=0,
    )


@pytest.fixture
async def seeded_performance(clean_database: None) -> Tuple[Event, Performance]:
    """An event with one performance of ten seats"""
    event = await seed_event()
    assert event.id is not None
    performance = await seed_performance(event_id=event.id, capacity=10)
    return event, performance


@pytest.fixture
def box_office_state() -> Dict[str, Any]:
    """Values handed from one BDD step to the next"""
    return {}
