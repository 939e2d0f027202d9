from fastapi.testclient import TestClient
import httpx
from pytest_bdd import parsers, when

from test.constants import reserve_url


@when(
    parsers.parse('I reserve spots "{names}" for event {event_id:d}'),
    target_fixture='response',
)
def reserve_spots(client: TestClient, names: str, event_id: int) -> httpx.Response:
    return client.post(reserve_url(event_id), json=names.split(','))
