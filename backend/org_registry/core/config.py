import os
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _build_default_database_url() -> str:
    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    db = os.getenv("POSTGRES_DB", "org_registry")
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    PROJECT_NAME: str = "Org Registry API"
    API_V1_STR: str = "/api/v1"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    TRIAL_PERIOD_DAYS: int = 14
    SLUG_SUFFIX_LENGTH: int = 8

    SEED_ENABLED: bool = False
    SEED_ORG_NAME: str = "Acme Inc"

    DATABASE_URL: str = Field(default_factory=_build_default_database_url)
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_cors_origins(cls, value):
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value

    @field_validator("TRIAL_PERIOD_DAYS")
    @classmethod
    def _validate_trial_period(cls, value):
        if value < 0:
            raise ValueError("TRIAL_PERIOD_DAYS must not be negative")
        return value

    @field_validator("SLUG_SUFFIX_LENGTH")
    @classmethod
    def _validate_suffix_length(cls, value):
        if not 4 <= value <= 32:
            raise ValueError("SLUG_SUFFIX_LENGTH must be between 4 and 32")
        return value

    @field_validator("SEED_ENABLED")
    @classmethod
    def _validate_seed_enabled(cls, value, info):
        env = str(info.data.get("ENV", "dev")).lower()
        if env != "dev" and value:
            raise ValueError("SEED_ENABLED must be false in non-dev environments")
        return value


settings = Settings()
