from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity.spot_entity import SpotEntity


class ListSpotsUseCase:
    def __init__(self, catalog_query_repo: ICatalogQueryRepo) -> None:
        self.catalog_query_repo = catalog_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_store]),
    ) -> Self:
        return cls(catalog_query_repo=catalog_query_repo)

    @Logger.io
    async def list_by_event(self, *, event_id: int) -> List[SpotEntity]:
        """List every spot of one event; an event without spots yields an empty list."""
        if self.catalog_query_repo.find_event(event_id=event_id) is None:
            Logger.base.warning(f'⚠️ [LIST_SPOTS] Event {event_id} not found')
            raise NotFoundError('Event not found')

        spots = self.catalog_query_repo.list_spots_by_event(event_id=event_id)
        Logger.base.info(f'✅ [LIST_SPOTS] Found {len(spots)} spots for event {event_id}')
        return spots
