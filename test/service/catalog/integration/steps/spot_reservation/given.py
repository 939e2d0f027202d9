from typing import Any

from fastapi.testclient import TestClient
from pytest_bdd import given, parsers

from test.constants import reserve_url


@given(parsers.parse('event {event_id:d} has the spots:'))
def event_has_spots(
    catalog_data: dict[str, Any], event_id: int, datatable: list[list[str]]
) -> None:
    header, *rows = datatable
    catalog_data['events'] = [{'id': event_id, 'name': f'Event {event_id}'}]
    catalog_data['spots'] = [
        {'id': spot_id, 'event_id': event_id, **dict(zip(header, row))}
        for spot_id, row in enumerate(rows, start=1)
    ]


@given(parsers.parse('spots "{names}" of event {event_id:d} were already reserved'))
def spots_already_reserved(client: TestClient, names: str, event_id: int) -> None:
    response = client.post(reserve_url(event_id), json=names.split(','))
    assert response.status_code == 201
