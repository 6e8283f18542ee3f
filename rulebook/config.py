"""Engine configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Settings loaded from RULEBOOK_* environment variables.

    None of these change rule semantics; they only affect logging.
    """

    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Emit one debug event per violation found
    LOG_VIOLATIONS: bool = False

    # Process environment only; a host application's .env is not read
    model_config = {"env_prefix": "RULEBOOK_", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
