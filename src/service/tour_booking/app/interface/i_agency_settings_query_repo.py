from abc import ABC, abstractmethod

from src.service.tour_booking.domain.entity.agency_booking_settings_entity import (
    AgencyBookingSettings,
)


class IAgencySettingsQueryRepo(ABC):
    @abstractmethod
    async def load_agency_booking_settings(self, *, agency_id: str) -> AgencyBookingSettings:
        """Agency settings, falling back to the configured defaults"""
        pass
