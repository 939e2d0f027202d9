from enum import Enum


class SpotStatus(Enum):
    AVAILABLE = 'available'
    RESERVED = 'reserved'
