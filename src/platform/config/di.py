"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.observability.tracing import TracingConfig
from src.service.catalog.driven_adapter.loader.catalog_json_loader import load_catalog_store


class Container(containers.DeclarativeContainer):
    config_service = providers.Singleton(Settings)

    tracing = providers.Singleton(TracingConfig.from_settings, config=config_service)

    # One store per process, built in the lifespan. It is both the
    # ICatalogQueryRepo and the ISpotCommandRepo of the catalog service.
    catalog_store = providers.Singleton(
        load_catalog_store,
        data_path=config_service.provided.CATALOG_DATA_PATH,
    )


container = Container()
