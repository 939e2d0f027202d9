"""Catalog Domain Enums"""

from src.service.catalog.domain.enum.spot_status import SpotStatus

__all__ = ['SpotStatus']
