from fastapi.testclient import TestClient
from prometheus_client import REGISTRY
import pytest

from src.platform.constant.route_constant import (
    EVENT_GET,
    EVENT_LIST,
    EVENT_SPOTS,
    EVENT_SPOTS_RESERVE,
    HEALTH,
    METRICS,
)
from test.constants import (
    EVENT_EMPTY_ID,
    EVENT_JAZZ_ID,
    EVENT_ROCK_ID,
    UNKNOWN_EVENT_ID,
    event_url,
    reserve_url,
    spots_url,
)


INVALID_BODY_MESSAGE = 'Invalid request body. Expected an array of strings with the spot names'


def _spot_status(client: TestClient, event_id: int, name: str) -> str:
    spots = client.get(spots_url(event_id)).json()
    return next(s['status'] for s in spots if s['name'] == name)


@pytest.mark.integration
class TestEventQueryAPI:
    def test_list_events(self, client: TestClient):
        response = client.get(EVENT_LIST)

        assert response.status_code == 200
        data = response.json()
        assert [e['id'] for e in data] == [EVENT_ROCK_ID, EVENT_JAZZ_ID, EVENT_EMPTY_ID]
        assert set(data[0]) == {
            'id',
            'name',
            'organization',
            'date',
            'price',
            'rating',
            'image_url',
            'created_at',
            'location',
        }

    def test_get_event(self, client: TestClient):
        response = client.get(event_url(EVENT_JAZZ_ID))

        assert response.status_code == 200
        data = response.json()
        assert data['name'] == 'Jazz by the River'
        assert data['price'] == 80.5
        assert data['image_url'] == 'https://images.example.com/jazz-river.png'

    def test_get_unknown_event(self, client: TestClient):
        response = client.get(event_url(UNKNOWN_EVENT_ID))

        assert response.status_code == 404
        assert response.json() == {'message': 'Event not found'}

    @pytest.mark.parametrize(
        'bad_id', ['abc', '1.5', '1a', '%20', '١', '9' * 25, str(-(2**63) - 1)]
    )
    def test_get_event_with_invalid_id(self, client: TestClient, bad_id: str):
        response = client.get(event_url(bad_id))

        assert response.status_code == 400
        assert response.json() == {'message': 'Invalid event ID'}

    def test_largest_64_bit_id_is_well_formed(self, client: TestClient):
        response = client.get(event_url(2**63 - 1))

        assert response.status_code == 404
        assert response.json() == {'message': 'Event not found'}

    def test_routes_are_served_from_route_constants(self, client: TestClient):
        paths = {route.path for route in client.app.routes}

        assert {EVENT_LIST, EVENT_GET, EVENT_SPOTS, EVENT_SPOTS_RESERVE} <= paths

    def test_list_spots(self, client: TestClient):
        response = client.get(spots_url(EVENT_ROCK_ID))

        assert response.status_code == 200
        assert response.json() == [
            {'id': 1, 'name': 'A1', 'status': 'available', 'event_id': EVENT_ROCK_ID},
            {'id': 2, 'name': 'A2', 'status': 'reserved', 'event_id': EVENT_ROCK_ID},
            {'id': 3, 'name': 'B1', 'status': 'available', 'event_id': EVENT_ROCK_ID},
            {'id': 4, 'name': 'B2', 'status': 'available', 'event_id': EVENT_ROCK_ID},
        ]

    def test_list_spots_of_event_without_spots(self, client: TestClient):
        response = client.get(spots_url(EVENT_EMPTY_ID))

        assert response.status_code == 200
        assert response.json() == []

    def test_list_spots_unknown_event(self, client: TestClient):
        response = client.get(spots_url(UNKNOWN_EVENT_ID))

        assert response.status_code == 404
        assert response.json() == {'message': 'Event not found'}

    def test_list_spots_invalid_id(self, client: TestClient):
        response = client.get(spots_url('one'))

        assert response.status_code == 400
        assert response.json() == {'message': 'Invalid event ID'}


@pytest.mark.integration
class TestReserveAPI:
    def test_reserve_spots(self, client: TestClient):
        response = client.post(reserve_url(EVENT_ROCK_ID), json=['A1', 'B1'])

        assert response.status_code == 201
        assert response.json() == {'message': 'Spots reserved successfully'}
        assert _spot_status(client, EVENT_ROCK_ID, 'A1') == 'reserved'
        assert _spot_status(client, EVENT_ROCK_ID, 'B1') == 'reserved'
        assert _spot_status(client, EVENT_ROCK_ID, 'B2') == 'available'

    def test_reserve_unknown_event(self, client: TestClient):
        response = client.post(reserve_url(UNKNOWN_EVENT_ID), json=['A1'])

        assert response.status_code == 404
        assert response.json() == {'message': 'Event not found'}

    def test_reserve_missing_spots_reports_all(self, client: TestClient):
        response = client.post(reserve_url(EVENT_ROCK_ID), json=['A3', 'A1', 'B9'])

        assert response.status_code == 404
        assert response.json() == {'message': 'Spot A3, B9 not found'}
        assert _spot_status(client, EVENT_ROCK_ID, 'A1') == 'available'

    def test_reserve_already_reserved(self, client: TestClient):
        response = client.post(reserve_url(EVENT_ROCK_ID), json=['A2', 'B2'])

        assert response.status_code == 400
        assert response.json() == {'message': 'Spot A2 already reserved'}
        assert _spot_status(client, EVENT_ROCK_ID, 'B2') == 'available'

    def test_second_reservation_of_same_spot_fails(self, client: TestClient):
        first = client.post(reserve_url(EVENT_JAZZ_ID), json=['C1'])
        second = client.post(reserve_url(EVENT_JAZZ_ID), json=['C1'])

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json() == {'message': 'Spot C1 already reserved'}

    def test_missing_wins_over_already_reserved(self, client: TestClient):
        response = client.post(reserve_url(EVENT_ROCK_ID), json=['A2', 'Z1'])

        assert response.status_code == 404
        assert response.json() == {'message': 'Spot Z1 not found'}

    def test_reserve_invalid_event_id(self, client: TestClient):
        response = client.post(reserve_url('abc'), json=['A1'])

        assert response.status_code == 400
        assert response.json() == {'message': 'Invalid event ID'}

    @pytest.mark.parametrize(
        'body',
        [
            b'',
            b'not json',
            b'{"spots": ["A1"]}',
            b'"A1"',
            b'[1, 2]',
            b'["A1", null]',
            b'null',
        ],
    )
    def test_reserve_invalid_body(self, client: TestClient, body: bytes):
        response = client.post(
            reserve_url(EVENT_ROCK_ID),
            content=body,
            headers={'Content-Type': 'application/json'},
        )

        assert response.status_code == 400
        assert response.json() == {'message': INVALID_BODY_MESSAGE}
        assert _spot_status(client, EVENT_ROCK_ID, 'A1') == 'available'

    def test_invalid_body_is_checked_before_event(self, client: TestClient):
        response = client.post(reserve_url(UNKNOWN_EVENT_ID), content=b'{}')

        assert response.status_code == 400
        assert response.json() == {'message': INVALID_BODY_MESSAGE}

    def test_empty_batch_succeeds_without_changes(self, client: TestClient):
        before = client.get(spots_url(EVENT_ROCK_ID)).json()

        response = client.post(reserve_url(EVENT_ROCK_ID), json=[])

        assert response.status_code == 201
        assert client.get(spots_url(EVENT_ROCK_ID)).json() == before


@pytest.mark.integration
class TestSystemEndpoints:
    def test_health(self, client: TestClient):
        response = client.get(HEALTH)

        assert response.status_code == 200
        data = response.json()
        assert data['status'] == 'healthy'
        assert (data['events'], data['spots']) == (3, 6)

    def test_metrics_count_reservations(self, client: TestClient):
        client.post(reserve_url(EVENT_ROCK_ID), json=['B2'])

        response = client.get(METRICS)

        assert response.status_code == 200
        assert 'spot_reservation_requests_total' in response.text
        assert 'spots_reserved_total' in response.text

    def test_unknown_events_share_one_metrics_label(self, client: TestClient):
        for event_id in range(1000, 1020):
            assert client.post(reserve_url(event_id), json=['A1']).status_code == 404

        labels = {
            sample.labels['event_id']
            for metric in REGISTRY.collect()
            if metric.name == 'spot_reservation_requests'
            for sample in metric.samples
        }
        assert 'unknown' in labels
        assert not labels & {str(event_id) for event_id in range(1000, 1020)}
