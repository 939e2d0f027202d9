"""
Test Configuration and Fixtures

This module provides:
- Environment setup before any application module reads settings
- A fresh in-memory catalog store per test
- A TestClient whose container serves that store instead of the data file
- BDD step definitions (imported from bdd_steps_loader.py)

Architecture:
- Unit tests (test/**/unit/): use store / use case fixtures directly
- Integration tests (test/**/integration/): drive the HTTP app through `client`
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are configured at import time.
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_dir = Path(__file__).parent

    test_log_dir = test_dir / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['CATALOG_DATA_PATH'] = str(test_dir / 'fixture' / 'catalog.json')
    os.environ.setdefault('SERVICE_NAME', 'spot-reservation-test')
    os.environ.setdefault('DEPLOY_ENV', 'test')


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402
from copy import deepcopy  # noqa: E402
from typing import Any  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.di import container  # noqa: E402
from src.service.catalog.driven_adapter.loader.catalog_json_loader import (  # noqa: E402
    CatalogPayload,
    build_catalog_store,
)
from src.service.catalog.driven_adapter.repo.in_memory_catalog_store import (  # noqa: E402
    InMemoryCatalogStore,
)
from test.constants import DEFAULT_CATALOG  # noqa: E402


# =============================================================================
# Pytest Hooks: mark tests by directory
# =============================================================================
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        path = str(item.path)
        if f'{os.sep}unit{os.sep}' in path:
            item.add_marker(pytest.mark.unit)
        elif f'{os.sep}integration{os.sep}' in path:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Catalog Fixtures
# =============================================================================
@pytest.fixture
def catalog_data() -> dict[str, Any]:
    """Raw catalog payload; tests may edit it before asking for catalog_store."""
    return deepcopy(DEFAULT_CATALOG)


@pytest.fixture
def catalog_store(catalog_data: dict[str, Any]) -> InMemoryCatalogStore:
    return build_catalog_store(CatalogPayload.model_validate(catalog_data))


# =============================================================================
# HTTP Fixtures
# =============================================================================
@pytest.fixture
def client(catalog_store: InMemoryCatalogStore) -> Generator[TestClient, None, None]:
    """TestClient running the real lifespan against the per-test catalog store."""
    from src.main import app

    with container.catalog_store.override(providers.Object(catalog_store)):
        with TestClient(app) as test_client:
            yield test_client


# =============================================================================
# BDD Steps
# =============================================================================
from test.bdd_steps_loader import *  # noqa: E402, F401, F403
