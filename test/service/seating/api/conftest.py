from collections.abc import Generator

from dependency_injector import providers
from fastapi.testclient import TestClient
import pytest

from src.platform.config.di import cleanup, container
from src.service.seating.main import app


STUDENT_PAYLOAD = {
    'name': 'Asha Rawat',
    'student_id': 'S-100',
    'department': 'CSE',
    'year': '3',
    'section': 'A',
}


@pytest.fixture
def client(seat_store, frozen_clock) -> Generator[TestClient, None, None]:
    """App over the fixture store and a frozen clock"""
    cleanup()
    with (
        container.seat_store.override(providers.Object(seat_store)),
        container.clock.override(providers.Object(frozen_clock)),
    ):
        with TestClient(app) as test_client:
            yield test_client
    cleanup()


@pytest.fixture
def onboarded_client(client: TestClient) -> TestClient:
    response = client.put('/api/student', json=STUDENT_PAYLOAD)
    assert response.status_code == 200
    return client
