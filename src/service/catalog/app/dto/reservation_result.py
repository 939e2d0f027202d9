from typing import Tuple

import attrs


RESERVATION_SUCCESS_MESSAGE = 'Spots reserved successfully'


@attrs.define(frozen=True)
class ReservationResult:
    event_id: int
    reserved_spots: Tuple[str, ...]
    message: str = RESERVATION_SUCCESS_MESSAGE
