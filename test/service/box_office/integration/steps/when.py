from typing import Any, Dict

from fastapi.testclient import TestClient
from pytest_bdd import parsers, when

from src.platform.constant.route_constant import ORDER_STATUS, TICKET_CANCEL, TICKET_STATUS
from test.service.box_office.helpers import CUSTOMER_USER, MANAGER_USER, STAFF_USER
from test.service.box_office.integration.api_flow import login, post_order, seats


@when(parsers.parse('the customer buys seats "{labels}"'))
def customer_buys(client: TestClient, box_office_state: Dict[str, Any], labels: str):
    box_office_state['response'] = post_order(
        client,
        CUSTOMER_USER,
        payment_id=box_office_state['payment_id'],
        event_id=box_office_state['event_id'],
        performance_id=box_office_state['performance_id'],
        seat_payload=seats(*[label.strip() for label in labels.split(',')]),
    )


@when('the customer cancels the purchased tickets')
def customer_cancels(client: TestClient, box_office_state: Dict[str, Any]):
    login(client, CUSTOMER_USER)
    box_office_state['response'] = client.post(
        TICKET_CANCEL, json={'ticket_ids': box_office_state['ticket_ids']}
    )


@when(parsers.parse('staff sets the first ticket status to "{new_status}"'))
def staff_sets_status(client: TestClient, box_office_state: Dict[str, Any], new_status: str):
    login(client, STAFF_USER)
    box_office_state['response'] = client.patch(
        TICKET_STATUS.format(ticket_id=box_office_state['ticket_ids'][0]),
        json={'status': new_status},
    )


@when(parsers.parse('a manager marks the order as "{new_status}"'))
def manager_updates_order(client: TestClient, box_office_state: Dict[str, Any], new_status: str):
    login(client, MANAGER_USER)
    box_office_state['response'] = client.patch(
        ORDER_STATUS.format(order_id=box_office_state['order']['id']),
        json={'status': new_status},
    )
