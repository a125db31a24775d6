from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # Discord
    discord_token: str = ""
    bot_prefix: str = "!"  # read for compatibility, no prefix commands use it

    # Price source
    price_asset_id: str = "scout-protocol-token"
    price_label: str = "DEV"
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"

    # Schedules
    presence_interval_minutes: float = 5
    username_updates_enabled: bool = False
    username_interval_minutes: float = 60

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @field_validator("presence_interval_minutes", "username_interval_minutes")
    @classmethod
    def _positive_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("interval must be greater than zero")
        return value

@lru_cache()
def get_settings():
    return Settings()
