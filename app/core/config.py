import os
from enum import StrEnum

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Environment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"
    STAGING = "staging"


ENVIRONMENT = os.getenv("RENDER_ENV", Environment.DEVELOPMENT)


class Settings(BaseSettings):
    app_name: str = "Trailpost"
    # postgres is used when db_host is set, otherwise a local sqlite file
    db_user: str | None = None
    db_password: str | None = None
    db_name: str | None = None
    db_host: str | None = None
    db_port: int = 5432
    sqlite_path: str = "trailpost.db"
    db_echo: bool = False

    testing: str | None = None
    render_env: str = ENVIRONMENT
    log_level: str = "INFO"
    firebase_credentials: str = "trailpost-service-account.json"

    contact_message_max_length: int = 500
    featured_listings_limit: int = 4

    model_config = SettingsConfigDict(
        env_file=".env" if ENVIRONMENT != Environment.PRODUCTION else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_testing(self) -> bool:
        return self.testing == "1"

    @property
    def database_url(self) -> URL:
        if self.db_host:
            return URL.create(
                drivername="postgresql+asyncpg",
                username=self.db_user,
                password=self.db_password,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            )
        return URL.create(drivername="sqlite+aiosqlite", database=self.sqlite_path)


config = Settings()
