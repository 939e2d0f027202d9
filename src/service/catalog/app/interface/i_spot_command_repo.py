"""
Spot Command Repository Interface

Write side of the catalog store: the only way a spot status changes.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager


class ISpotCommandRepo(ABC):
    @abstractmethod
    def write_locked(self) -> AbstractContextManager[None]:
        """Exclusive critical section; reads made by the holder stay consistent with its writes."""
        pass

    @abstractmethod
    def set_spot_reserved(self, *, event_id: int, name: str) -> None:
        """Mark the authoritative spot record as reserved. Raises NotFoundError if absent."""
        pass
