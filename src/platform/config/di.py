"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.tour_booking.driven_adapter.repo.agency_settings_query_repo_impl import (
    AgencySettingsQueryRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.in_memory_store import InMemoryStore
from src.service.tour_booking.driven_adapter.repo.seat_layout_command_repo_impl import (
    SeatLayoutCommandRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.seat_layout_query_repo_impl import (
    SeatLayoutQueryRepoImpl,
)
from src.service.tour_booking.driven_adapter.repo.tour_package_repo_impl import (
    TourPackageRepoImpl,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Storage shared by every repository (process-local)
    in_memory_store = providers.Singleton(InMemoryStore)

    # Repositories
    seat_layout_command_repo = providers.Singleton(SeatLayoutCommandRepoImpl, store=in_memory_store)
    seat_layout_query_repo = providers.Singleton(SeatLayoutQueryRepoImpl, store=in_memory_store)
    booking_command_repo = providers.Singleton(BookingCommandRepoImpl, store=in_memory_store)
    booking_query_repo = providers.Singleton(BookingQueryRepoImpl, store=in_memory_store)
    agency_settings_query_repo = providers.Singleton(
        AgencySettingsQueryRepoImpl, store=in_memory_store
    )
    tour_package_repo = providers.Singleton(TourPackageRepoImpl, store=in_memory_store)


container = Container()


def cleanup() -> None:
    container.reset_singletons()
