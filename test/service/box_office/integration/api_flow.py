"""HTTP helpers shared by the API tests and the BDD steps"""

import asyncio
from typing import Any, Dict, List

from fastapi.testclient import TestClient

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    ORDER_BASE,
    PAYMENT_BASE,
    PAYMENT_COMPLETE,
    PERFORMANCE_BASE,
)
from src.service.box_office.domain.entity.user_entity import UserEntity
from src.service.box_office.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from test.service.box_office.helpers import CUSTOMER, STAFF_USER, seed_event


CUSTOMER_PAYLOAD = {
    'first_name': CUSTOMER.first_name,
    'last_name': CUSTOMER.last_name,
    'email': CUSTOMER.email,
}


def login(client: TestClient, user: UserEntity) -> None:
    client.cookies.set(settings.AUTH_COOKIE_NAME, JwtAuth().create_jwt_token(user))


def create_event() -> int:
    # Events have no HTTP API; the row is written directly
    event = asyncio.run(seed_event())
    assert event.id is not None
    return event.id


def create_performance(client: TestClient, *, event_id: int, capacity: int = 10) -> Dict[str, Any]:
    login(client, STAFF_USER)
    response = client.post(
        PERFORMANCE_BASE,
        json={
            'event_id': event_id,
            'date': '2025-03-14',
            'start_time': '19:30',
            'end_time': '22:00',
            'ticket_types': [{'name': 'Stalls', 'price': 45.0, 'available_count': capacity}],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


def create_payment(
    client: TestClient, user: UserEntity, *, amount: float = 90.0, complete: bool = True
) -> int:
    login(client, user)
    response = client.post(PAYMENT_BASE, json={'amount': amount, 'method': 'credit_card'})
    assert response.status_code == 201, response.text
    payment_id = response.json()['id']
    if complete:
        response = client.post(PAYMENT_COMPLETE.format(payment_id=payment_id))
        assert response.status_code == 200, response.text
    return payment_id


def seats(*labels: str, price: float = 45.0) -> List[Dict[str, Any]]:
    """'A1' -> section A, row 1, seat 1"""
    return [
        {'section': label[0], 'row': '1', 'seat': label[1:], 'price': price} for label in labels
    ]


def post_order(
    client: TestClient,
    user: UserEntity,
    *,
    payment_id: int,
    event_id: int,
    performance_id: int,
    seat_payload: List[Dict[str, Any]],
):
    login(client, user)
    return client.post(
        ORDER_BASE,
        json={
            'payment_id': payment_id,
            'event_id': event_id,
            'performance_id': performance_id,
            'seats': seat_payload,
            'customer': CUSTOMER_PAYLOAD,
        },
    )
