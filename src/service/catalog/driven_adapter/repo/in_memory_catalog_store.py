"""
In-Memory Catalog Store

Authoritative holder of the loaded events and spots for the process lifetime.

- Events are immutable after construction
- Spots are mutated in place, by list index, through set_spot_reserved() only
- Read accessors hand out copies so callers cannot write through them
- A read/write lock gives shared reads and exclusive reservation batches
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Dict, List, Optional, Sequence, Tuple

import attrs

from src.platform.exception.exceptions import CatalogLoadError, NotFoundError
from src.platform.state.read_write_lock import ReadWriteLock
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.app.interface.i_spot_command_repo import ISpotCommandRepo
from src.service.catalog.domain.entity.event_entity import EventEntity
from src.service.catalog.domain.entity.spot_entity import SpotEntity


class InMemoryCatalogStore(ICatalogQueryRepo, ISpotCommandRepo):
    def __init__(self, *, events: Sequence[EventEntity], spots: Sequence[SpotEntity]) -> None:
        self._events: Tuple[EventEntity, ...] = tuple(events)
        self._spots: List[SpotEntity] = [attrs.evolve(spot) for spot in spots]
        self._lock = ReadWriteLock(name='catalog_store')

        self._event_index: Dict[int, int] = {}
        self._spot_index: Dict[Tuple[int, str], int] = {}
        self._spots_by_event: Dict[int, List[int]] = {}
        self._build_indexes()

    def _build_indexes(self) -> None:
        for idx, event in enumerate(self._events):
            if event.id in self._event_index:
                raise CatalogLoadError(f'Duplicate event id {event.id}')
            self._event_index[event.id] = idx
            self._spots_by_event[event.id] = []

        seen_spot_ids: set[int] = set()
        for idx, spot in enumerate(self._spots):
            if spot.id in seen_spot_ids:
                raise CatalogLoadError(f'Duplicate spot id {spot.id}')
            seen_spot_ids.add(spot.id)

            if spot.event_id not in self._event_index:
                raise CatalogLoadError(
                    f'Spot {spot.id} ({spot.name}) references unknown event {spot.event_id}'
                )

            key = (spot.event_id, spot.name)
            if key in self._spot_index:
                raise CatalogLoadError(
                    f'Duplicate spot name {spot.name!r} in event {spot.event_id}'
                )
            self._spot_index[key] = idx
            self._spots_by_event[spot.event_id].append(idx)

    # ============================ Locking ============================

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._lock.write_locked():
            yield

    # ============================ Query side ============================

    def list_events(self) -> List[EventEntity]:
        return list(self._events)

    def find_event(self, *, event_id: int) -> Optional[EventEntity]:
        idx = self._event_index.get(event_id)
        return None if idx is None else self._events[idx]

    def find_spot(self, *, event_id: int, name: str) -> Optional[SpotEntity]:
        with self._lock.read_locked():
            idx = self._spot_index.get((event_id, name))
            return None if idx is None else attrs.evolve(self._spots[idx])

    def list_spots_by_event(self, *, event_id: int) -> List[SpotEntity]:
        with self._lock.read_locked():
            indexes = self._spots_by_event.get(event_id, [])
            return [attrs.evolve(self._spots[idx]) for idx in indexes]

    # ============================ Command side ============================

    def set_spot_reserved(self, *, event_id: int, name: str) -> None:
        with self._lock.write_locked():
            idx = self._spot_index.get((event_id, name))
            if idx is None:
                raise NotFoundError(f'Spot {name} not found')
            self._spots[idx].reserve()

    @property
    def event_count(self) -> int:
        return len(self._events)

    @property
    def spot_count(self) -> int:
        return len(self._spots)
