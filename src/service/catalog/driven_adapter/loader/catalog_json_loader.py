"""
Catalog JSON Loader

Reads the startup payload ``{"events": [...], "spots": [...]}`` and builds the
InMemoryCatalogStore. Any problem is a CatalogLoadError: the service must not
start with an inconsistent catalog.
"""

from pathlib import Path
from typing import List

import orjson
from pydantic import BaseModel, ConfigDict, ValidationError

from src.platform.exception.exceptions import CatalogLoadError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.domain.entity.event_entity import EventEntity
from src.service.catalog.domain.entity.spot_entity import SpotEntity
from src.service.catalog.domain.enum.spot_status import SpotStatus
from src.service.catalog.driven_adapter.repo.in_memory_catalog_store import InMemoryCatalogStore


class EventRecord(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: int
    name: str
    organization: str = ''
    date: str = ''
    price: float = 0.0
    rating: str = ''
    image_url: str = ''
    created_at: str = ''
    location: str = ''


class SpotRecord(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: int
    name: str
    status: SpotStatus
    event_id: int


class CatalogPayload(BaseModel):
    events: List[EventRecord]
    spots: List[SpotRecord]


def build_catalog_store(payload: CatalogPayload) -> InMemoryCatalogStore:
    try:
        events = [EventEntity(**record.model_dump()) for record in payload.events]
    except ValueError as e:
        raise CatalogLoadError(f'Invalid event record: {e}') from e

    spots = [
        SpotEntity(id=record.id, name=record.name, event_id=record.event_id, status=record.status)
        for record in payload.spots
    ]
    return InMemoryCatalogStore(events=events, spots=spots)


def parse_catalog(raw: bytes | str) -> InMemoryCatalogStore:
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise CatalogLoadError(f'Catalog is not valid JSON: {e}') from e

    try:
        payload = CatalogPayload.model_validate(data)
    except ValidationError as e:
        raise CatalogLoadError(f'Catalog does not match the expected shape: {e}') from e

    return build_catalog_store(payload)


@Logger.io(truncate_content=True)
def load_catalog_store(*, data_path: Path) -> InMemoryCatalogStore:
    Logger.base.info(f'📂 [CATALOG] Loading catalog from {data_path}')

    try:
        raw = Path(data_path).read_bytes()
    except OSError as e:
        raise CatalogLoadError(f'Cannot read catalog file {data_path}: {e}') from e

    store = parse_catalog(raw)

    Logger.base.info(
        f'✅ [CATALOG] Loaded {store.event_count} events and {store.spot_count} spots'
    )
    return store
