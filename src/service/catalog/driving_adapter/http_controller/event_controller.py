import re
from typing import List

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError

from src.platform.constant.route_constant import (
    EVENT_GET,
    EVENT_LIST,
    EVENT_SPOTS,
    EVENT_SPOTS_RESERVE,
)
from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.reserve_spots_use_case import ReserveSpotsUseCase
from src.service.catalog.app.query.get_event_use_case import GetEventUseCase
from src.service.catalog.app.query.list_events_use_case import ListEventsUseCase
from src.service.catalog.app.query.list_spots_use_case import ListSpotsUseCase
from src.service.catalog.domain.entity.event_entity import EventEntity
from src.service.catalog.domain.entity.spot_entity import SpotEntity
from src.service.catalog.driving_adapter.schema.event_schema import (
    EventResponse,
    MessageResponse,
    SpotReservationRequest,
    SpotResponse,
)


router = APIRouter()

_EVENT_ID_PATTERN = re.compile(r'[+-]?[0-9]+', re.ASCII)
_EVENT_ID_MIN = -(2**63)
_EVENT_ID_MAX = 2**63 - 1
INVALID_EVENT_ID_MESSAGE = 'Invalid event ID'
INVALID_RESERVATION_BODY_MESSAGE = (
    'Invalid request body. Expected an array of strings with the spot names'
)


def parse_event_id(event_id: str) -> int:
    """Path parameter as sent by the client; a non-integer id is a 400, not a 404."""
    if not _EVENT_ID_PATTERN.fullmatch(event_id):
        raise InvalidInputError(INVALID_EVENT_ID_MESSAGE)
    parsed = int(event_id)
    # Ids are signed 64-bit; anything wider is malformed, not merely unknown
    if not _EVENT_ID_MIN <= parsed <= _EVENT_ID_MAX:
        raise InvalidInputError(INVALID_EVENT_ID_MESSAGE)
    return parsed


def _to_event_response(event: EventEntity) -> EventResponse:
    return EventResponse(
        id=event.id,
        name=event.name,
        organization=event.organization,
        date=event.date,
        price=event.price,
        rating=event.rating,
        image_url=event.image_url,
        created_at=event.created_at,
        location=event.location,
    )


def _to_spot_response(spot: SpotEntity) -> SpotResponse:
    return SpotResponse(
        id=spot.id,
        name=spot.name,
        status=spot.status.value,
        event_id=spot.event_id,
    )


@router.get(EVENT_LIST, status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_all()
    return [_to_event_response(event) for event in events]


@router.get(EVENT_GET, status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: int = Depends(parse_event_id),
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    event = await use_case.get_by_id(event_id=event_id)
    return _to_event_response(event)


@router.get(EVENT_SPOTS, status_code=status.HTTP_200_OK)
@Logger.io
async def list_spots(
    event_id: int = Depends(parse_event_id),
    use_case: ListSpotsUseCase = Depends(ListSpotsUseCase.depends),
) -> List[SpotResponse]:
    spots = await use_case.list_by_event(event_id=event_id)
    return [_to_spot_response(spot) for spot in spots]


@router.post(EVENT_SPOTS_RESERVE, status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_spots(
    request: Request,
    event_id: int = Depends(parse_event_id),
    use_case: ReserveSpotsUseCase = Depends(ReserveSpotsUseCase.depends),
) -> MessageResponse:
    """Reserve a batch of spots. Either every spot is reserved or none is."""
    body = await request.body()
    try:
        spot_names = SpotReservationRequest.model_validate_json(body).root
    except ValidationError as e:
        raise InvalidInputError(INVALID_RESERVATION_BODY_MESSAGE) from e

    result = await use_case.reserve(event_id=event_id, spot_names=spot_names)
    return MessageResponse(message=result.message)
