"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.catalog.app.command import reserve_spots_use_case
from src.service.catalog.app.query import (
    get_event_use_case,
    list_events_use_case,
    list_spots_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    list_events_use_case,
    get_event_use_case,
    list_spots_use_case,
    reserve_spots_use_case,
]
