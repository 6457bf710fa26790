from unittest.mock import MagicMock

import pytest

from test.service.box_office.unit.uow_double import FakeUnitOfWork


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def queue_spy() -> MagicMock:
    queue = MagicMock()
    queue.enqueue.return_value = True
    return queue
