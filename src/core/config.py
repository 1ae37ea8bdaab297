"""Application configuration, read from the environment and ``.env``."""

import secrets
import warnings
from typing import Annotated, Any, Literal, Self

from pydantic import AnyUrl, BeforeValidator, HttpUrl, computed_field, model_validator
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    """Accept a comma separated string or a JSON list."""
    if isinstance(v, str) and not v.startswith("["):
        return [origin.strip() for origin in v.split(",") if origin.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    # Service
    PROJECT_NAME: str = "ToneHunt Catalog"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    SERVER_PORT: int = 8000
    ROOTPATH: str = ""
    API_V1_STR: str = "/api/v1"

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_DIR: str | None = None  # daily rotated files outside local when set

    # Sessions
    SECRET_KEY: str = secrets.token_urlsafe(32)
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8

    # CORS
    FRONTEND_HOST: str = "http://localhost:3000"
    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = []
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST"]
    CORS_ALLOW_HEADERS: list[str] = ["Authorization", "Content-Type"]

    SENTRY_DSN: HttpUrl | None = None

    # PostgreSQL
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "tonehunt"

    # Catalog listing
    MODELS_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    LISTING_BASE_PATH: str = "/"
    LISTING_ABORT_SUPERSEDED: bool = True
    CATALOG_API_URL: str = "http://localhost:8000/api/v1"
    CATALOG_HTTP_TIMEOUT_SEC: float = 10.0

    @computed_field
    @property
    def all_cors_origins(self) -> list[str]:
        origins = [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]
        return [*origins, self.FRONTEND_HOST]

    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
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

    @model_validator(mode="after")
    def _validate(self) -> Self:
        if self.SECRET_KEY == "changethis":
            message = 'SECRET_KEY is still "changethis"; set a real key before deploying.'
            if self.ENVIRONMENT != "local":
                raise ValueError(message)
            warnings.warn(message, stacklevel=1)
        if not 1 <= self.MODELS_PAGE_SIZE <= self.MAX_PAGE_SIZE:
            raise ValueError("MODELS_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE")
        return self


settings = Settings()
