"""Engine configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from XIANGQI_* environment variables (or a .env file)."""

    model_config = SettingsConfigDict(
        env_prefix="XIANGQI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Re-check legality inside GameState.apply_move unless told otherwise
    strict_moves: bool = True

    # Level for the console sink set up by main.py
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
