"""
Catalog Query Repository Interface

Read side of the catalog store. Every accessor returns detached copies;
absence is reported as None, never as an empty record.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.catalog.domain.entity.event_entity import EventEntity
from src.service.catalog.domain.entity.spot_entity import SpotEntity


class ICatalogQueryRepo(ABC):
    @abstractmethod
    def list_events(self) -> List[EventEntity]:
        """All events in load order."""
        pass

    @abstractmethod
    def find_event(self, *, event_id: int) -> Optional[EventEntity]:
        pass

    @abstractmethod
    def find_spot(self, *, event_id: int, name: str) -> Optional[SpotEntity]:
        """Exact, case-sensitive name match scoped to one event."""
        pass

    @abstractmethod
    def list_spots_by_event(self, *, event_id: int) -> List[SpotEntity]:
        """Spots owned by the event, in load order."""
        pass
