import attrs

from src.platform.config.core_setting import Settings, settings as default_settings


@attrs.frozen
class AgencyBookingSettings:
    minimum_advance_amount: int = 1000
    minimum_advance_percentage: int = 20
    use_percentage: bool = False
    hold_duration_minutes: int = 60
    allow_agent_hold: bool = True
    require_transaction_id: bool = True

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> 'AgencyBookingSettings':
        return cls(
            minimum_advance_amount=settings.DEFAULT_MINIMUM_ADVANCE_AMOUNT,
            minimum_advance_percentage=settings.DEFAULT_MINIMUM_ADVANCE_PERCENTAGE,
            use_percentage=settings.DEFAULT_USE_PERCENTAGE,
            hold_duration_minutes=settings.DEFAULT_HOLD_DURATION_MINUTES,
            allow_agent_hold=settings.DEFAULT_ALLOW_AGENT_HOLD,
            require_transaction_id=settings.DEFAULT_REQUIRE_TRANSACTION_ID,
        )
