"""
Reserve Spots Use Case - all-or-nothing batch reservation

Flow, inside one exclusive section of the catalog store:
1. Event must exist
2. Every requested name must resolve to a spot of that event (all missing names reported)
3. Every resolved spot must be available (all reserved names reported)
4. Commit: mark every requested spot reserved

Nothing is written unless steps 1-3 pass for the whole batch.
"""

import time
from typing import List, Self, Sequence

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import UNKNOWN_EVENT_LABEL, metrics
from src.service.catalog.app.dto import ReservationResult
from src.service.catalog.app.interface import ICatalogQueryRepo, ISpotCommandRepo
from src.service.catalog.domain.entity.spot_entity import SpotEntity


class ReserveSpotsUseCase:
    def __init__(
        self,
        catalog_query_repo: ICatalogQueryRepo,
        spot_command_repo: ISpotCommandRepo,
    ) -> None:
        self.catalog_query_repo = catalog_query_repo
        self.spot_command_repo = spot_command_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_store]),
        spot_command_repo: ISpotCommandRepo = Depends(Provide[Container.catalog_store]),
    ) -> Self:
        return cls(catalog_query_repo=catalog_query_repo, spot_command_repo=spot_command_repo)

    @Logger.io
    async def reserve(self, *, event_id: int, spot_names: List[str]) -> ReservationResult:
        """
        Reserve every named spot of the event, or none of them.

        Duplicate names are kept as given: they are reported twice on failure
        and re-applied harmlessly on commit.

        Raises:
            NotFoundError: unknown event, or one or more unknown spot names
            DomainError: one or more spots already reserved
        """
        started_at = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.reserve_spots',
            attributes={'event.id': event_id, 'spot.count': len(spot_names)},
        ):
            Logger.base.info(
                f'🎯 [RESERVE] Event {event_id}: reserving {len(spot_names)} spots {spot_names}'
            )
            # Unknown ids share one label so clients cannot mint new series
            metrics_label = UNKNOWN_EVENT_LABEL
            try:
                with self.spot_command_repo.write_locked():
                    self._ensure_event_exists(event_id=event_id)
                    metrics_label = str(event_id)
                    spots = self._resolve_spots(event_id=event_id, spot_names=spot_names)
                    self._ensure_all_available(spots=spots)
                    self._commit(event_id=event_id, spot_names=spot_names)
            except NotFoundError:
                self._record(event_label=metrics_label, result='not_found', started_at=started_at)
                raise
            except DomainError:
                self._record(
                    event_label=metrics_label, result='already_reserved', started_at=started_at
                )
                raise

        self._record(
            event_label=metrics_label,
            result='success',
            started_at=started_at,
            reserved_count=len(set(spot_names)),
        )
        Logger.base.info(f'✅ [RESERVE] Event {event_id}: reserved {spot_names}')
        return ReservationResult(event_id=event_id, reserved_spots=tuple(spot_names))

    def _ensure_event_exists(self, *, event_id: int) -> None:
        if self.catalog_query_repo.find_event(event_id=event_id) is None:
            Logger.base.warning(f'⚠️ [RESERVE] Event {event_id} not found')
            raise NotFoundError('Event not found')

    def _resolve_spots(self, *, event_id: int, spot_names: Sequence[str]) -> List[SpotEntity]:
        spots: List[SpotEntity] = []
        missing: List[str] = []
        for name in spot_names:
            spot = self.catalog_query_repo.find_spot(event_id=event_id, name=name)
            if spot is None:
                missing.append(name)
            else:
                spots.append(spot)

        if missing:
            Logger.base.warning(f'⚠️ [RESERVE] Event {event_id}: spots not found {missing}')
            raise NotFoundError(f'Spot {", ".join(missing)} not found')
        return spots

    def _ensure_all_available(self, *, spots: Sequence[SpotEntity]) -> None:
        reserved = [spot.name for spot in spots if spot.is_reserved]
        if reserved:
            Logger.base.warning(f'⚠️ [RESERVE] Spots already reserved {reserved}')
            raise DomainError(f'Spot {", ".join(reserved)} already reserved')

    def _commit(self, *, event_id: int, spot_names: Sequence[str]) -> None:
        for name in spot_names:
            self.spot_command_repo.set_spot_reserved(event_id=event_id, name=name)

    @staticmethod
    def _record(
        *, event_label: str, result: str, started_at: float, reserved_count: int = 0
    ) -> None:
        metrics.record_spot_reservation(
            event_id=event_label,
            result=result,
            duration=time.perf_counter() - started_at,
            reserved_count=reserved_count,
        )
