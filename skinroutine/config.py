from functools import lru_cache

from pydantic_settings import BaseSettings

from skinroutine.schemas import Season


class Settings(BaseSettings):
    """Application settings"""
    app_name: str = "SkinRoutine"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Storage
    storage_backend: str = "memory"  # memory | sql
    database_url: str = "sqlite+aiosqlite:///./skinroutine.db"
    database_echo: bool = False
    seed_catalog: bool = True

    # Routine generation
    max_products_per_step: int = 2
    default_season: Season = Season.WINTER

    class Config:
        env_file = '.env'
        env_prefix = 'SKINROUTINE_'


@lru_cache()
def get_settings() -> Settings:
    return Settings()
