from functools import lru_cache
import os
from typing import Annotated, Any, Literal
import warnings

from pydantic import (
    AnyUrl,
    BeforeValidator,
    ValidationInfo,
    computed_field,
    field_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_csv(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    API_V1_STR: str = "/v1"
    PROJECT_NAME: str = "Localization Service"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 3010

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_csv)] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        """Return all CORS origins as strings."""
        return [str(origin).rstrip("/") for origin in self.CORS_ORIGINS]

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "localization"

    # Full SQLAlchemy URL; takes precedence over the POSTGRES_* settings
    DATABASE_URL: str | None = None

    @field_validator("POSTGRES_PASSWORD", mode="after")
    @classmethod
    def validate_postgres_password(cls, v: str, info: ValidationInfo) -> str:
        """Validate that POSTGRES_PASSWORD is changed in production."""
        env = (
            info.data.get("ENVIRONMENT")
            if info.data
            else os.getenv("ENVIRONMENT", "local")
        )
        if v == "changethis" and env == "production":
            raise ValueError(
                "The default POSTGRES_PASSWORD cannot be used in production"
            )
        if v == "changethis" and env != "local":
            warnings.warn(
                "POSTGRES_PASSWORD still has its default value",
                UserWarning,
                stacklevel=2,
            )
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Build the SQLAlchemy connection URI."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            MultiHostUrl.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # Request defaults for the bundle endpoints
    DEFAULT_BUNDLE_NAMESPACES: Annotated[
        list[str] | str, BeforeValidator(parse_csv)
    ] = [
        "ui",
        "emails",
    ]
    DEFAULT_BUNDLE_LOCALES: Annotated[list[str] | str, BeforeValidator(parse_csv)] = [
        "en"
    ]
    DEFAULT_BUNDLE_STATUS: str = "published"
    DEFAULT_MISSING_LOCALES: Annotated[
        list[str] | str, BeforeValidator(parse_csv)
    ] = [
        "en",
        "ar",
        "es",
        "fr",
    ]

    # Glossary paging
    GLOSSARY_PAGE_LIMIT: int = 100
    GLOSSARY_SEARCH_LIMIT: int = 20
    GLOSSARY_MOST_USED_LIMIT: int = 10


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
