# config.py – Chargement des paramètres via pydantic-settings

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from riftrewind.riot.endpoints import DEFAULT_BASE_URL

class Settings(BaseSettings):
    # — Riot API —
    RIOT_API_KEY: str = ""
    RIOT_BASE_URL: str = DEFAULT_BASE_URL  # {region} remplacé par la plateforme
    DEFAULT_REGION: str = "euw1"

    # — Stockage du leaderboard —
    STORAGE_BACKEND: Literal["sql", "redis", "memory"] = "sql"
    DB_URL: str = "sqlite:///data/riftrewind.db"
    REDIS_URL: Optional[str] = None

    # — Divers —
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
