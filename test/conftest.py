"""
Test Configuration and Fixtures

This module provides:
- Test log directory setup before any application module is imported
- In-memory repositories wired to a fresh store for every test
- Session-scoped TestClient running the real application lifespan

Architecture:
- Unit tests (test/**/unit/): pure domain functions and use cases with AsyncMock repos
- Integration tests (test/**/integration/): real in-memory adapters and the HTTP app
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are created at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('DEPLOY_ENV', 'test')


_early_setup_test_environment()

from collections.abc import Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.service.tour_booking.driven_adapter.repo.agency_settings_query_repo_impl import (  # noqa: E402
    AgencySettingsQueryRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.booking_command_repo_impl import (  # noqa: E402
    BookingCommandRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.booking_query_repo_impl import (  # noqa: E402
    BookingQueryRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.in_memory_store import (  # noqa: E402
    InMemoryStore,
)
from src.service.tour_booking.driven_adapter.repo.seat_layout_command_repo_impl import (  # noqa: E402
    SeatLayoutCommandRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.seat_layout_query_repo_impl import (  # noqa: E402
    SeatLayoutQueryRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.tour_package_repo_impl import (  # noqa: E402
    TourPackageRepoImpl,
)


# =============================================================================
# In-memory adapters
# =============================================================================
@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def seat_layout_command_repo(store: InMemoryStore) -> SeatLayoutCommandRepoImpl:
    return SeatLayoutCommandRepoImpl(store=store)


@pytest.fixture
def seat_layout_query_repo(store: InMemoryStore) -> SeatLayoutQueryRepoImpl:
    return SeatLayoutQueryRepoImpl(store=store)


@pytest.fixture
def booking_command_repo(store: InMemoryStore) -> BookingCommandRepoImpl:
    return BookingCommandRepoImpl(store=store)


@pytest.fixture
def booking_query_repo(store: InMemoryStore) -> BookingQueryRepoImpl:
    return BookingQueryRepoImpl(store=store)


@pytest.fixture
def agency_settings_query_repo(store: InMemoryStore) -> AgencySettingsQueryRepoImpl:
    return AgencySettingsQueryRepoImpl(store=store)


@pytest.fixture
def tour_package_repo(store: InMemoryStore) -> TourPackageRepoImpl:
    return TourPackageRepoImpl(store=store)


# =============================================================================
# HTTP client
# =============================================================================
@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def clean_store(client: TestClient) -> Generator[InMemoryStore, None, None]:
    """Empty the application's store around a test that goes through HTTP"""
    from src.platform.config.di import container

    app_store = container.in_memory_store()
    app_store.clear()
    yield app_store
    app_store.clear()
