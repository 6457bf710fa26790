from typing import Any, Dict

from fastapi.testclient import TestClient
from pytest_bdd import parsers, then

from src.platform.constant.route_constant import PERFORMANCE_GET, TICKET_GET
from test.service.box_office.helpers import CUSTOMER_USER
from test.service.box_office.integration.api_flow import login


@then(parsers.parse('the response status code should be {status_code:d}'))
def response_status(box_office_state: Dict[str, Any], status_code: int):
    response = box_office_state['response']
    assert response.status_code == status_code, response.text


@then(parsers.parse('the error kind should be "{kind}"'))
def error_kind(box_office_state: Dict[str, Any], kind: str):
    assert box_office_state['response'].json()['kind'] == kind


@then(parsers.parse('the unavailable seats should be "{labels}"'))
def unavailable_seats(box_office_state: Dict[str, Any], labels: str):
    expected = [label.strip() for label in labels.split(';')]
    assert box_office_state['response'].json()['unavailable_seats'] == expected


@then(parsers.parse('the performance should have {available:d} tickets available'))
def performance_available(client: TestClient, box_office_state: Dict[str, Any], available: int):
    response = client.get(
        PERFORMANCE_GET.format(performance_id=box_office_state['performance_id'])
    )
    assert response.status_code == 200
    assert response.json()['available_tickets'] == available


@then(parsers.parse('every purchased ticket should be "{expected_status}"'))
def tickets_have_status(
    client: TestClient, box_office_state: Dict[str, Any], expected_status: str
):
    login(client, CUSTOMER_USER)
    for ticket_id in box_office_state['ticket_ids']:
        response = client.get(TICKET_GET.format(ticket_id=ticket_id))
        assert response.status_code == 200
        assert response.json()['status'] == expected_status
