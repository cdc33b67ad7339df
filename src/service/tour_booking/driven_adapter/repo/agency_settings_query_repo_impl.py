from src.platform.logging.loguru_io import Logger
from src.service.tour_booking.app.interface.i_agency_settings_query_repo import (
    IAgencySettingsQueryRepo,
)
from src.service.tour_booking.domain.entity.agency_booking_settings_entity import (
    AgencyBookingSettings,
)
from src.service.tour_booking.driven_adapter.repo.in_memory_store import InMemoryStore


class AgencySettingsQueryRepoImpl(IAgencySettingsQueryRepo):
    def __init__(self, *, store: InMemoryStore) -> None:
        self.store = store

    @Logger.io
    async def load_agency_booking_settings(self, *, agency_id: str) -> AgencyBookingSettings:
        with self.store.lock:
            stored = self.store.agency_settings.get(agency_id)
        return stored or AgencyBookingSettings.from_settings()

    def save_agency_booking_settings(
        self, *, agency_id: str, booking_settings: AgencyBookingSettings
    ) -> None:
        """Seed settings; agency administration lives outside this service"""
        with self.store.lock:
            self.store.agency_settings[agency_id] = booking_settings
