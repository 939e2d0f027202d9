import attrs

from src.service.catalog.domain.enum.spot_status import SpotStatus


@attrs.define
class SpotEntity:
    id: int
    name: str
    event_id: int
    status: SpotStatus = SpotStatus.AVAILABLE

    @property
    def is_reserved(self) -> bool:
        return self.status == SpotStatus.RESERVED

    def reserve(self) -> None:
        # One-way: there is no transition back to AVAILABLE
        self.status = SpotStatus.RESERVED
