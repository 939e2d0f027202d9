"""Application layer interfaces (Ports)"""

from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.app.interface.i_spot_command_repo import ISpotCommandRepo

__all__ = ['ICatalogQueryRepo', 'ISpotCommandRepo']
