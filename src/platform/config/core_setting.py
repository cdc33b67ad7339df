import json
from pathlib import Path
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Tour Booking Engine'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # comma list or JSON array

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return json.loads(v)
        elif isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Agency booking defaults (used when an agency has no stored settings)
    DEFAULT_MINIMUM_ADVANCE_AMOUNT: int = 1000
    DEFAULT_MINIMUM_ADVANCE_PERCENTAGE: int = 20
    DEFAULT_USE_PERCENTAGE: bool = False
    DEFAULT_HOLD_DURATION_MINUTES: int = 60
    DEFAULT_ALLOW_AGENT_HOLD: bool = True
    DEFAULT_REQUIRE_TRANSACTION_ID: bool = True

    # Hold countdown thresholds (minutes left)
    HOLD_CRITICAL_MINUTES: int = 5
    HOLD_WARNING_MINUTES: int = 15

    # Booking reference
    BOOKING_REF_DIGITS: int = 6


settings = Settings()  # type: ignore
