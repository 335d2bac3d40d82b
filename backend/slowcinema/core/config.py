from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "Slow Cinema Club"
    API_PREFIX: str = "/api"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Required: the process refuses to start without a connection string.
    DATABASE_URL: str
    DATABASE_NAME: str = "scc"
    TEST_DATABASE_URL: str = "sqlite://"

    DB_POOL_MAX_SIZE: int = 10
    DB_POOL_MIN_SIZE: int = 5
    DB_POOL_IDLE_TIMEOUT: int = 60
    DB_CONNECT_TIMEOUT: int = 10
    DB_SOCKET_TIMEOUT: int = 45

    SITE_URL: str = "https://slowcinemaclub.com"
    SITE_NAME: str = "Slow Cinema Club"
    SITE_DESCRIPTION: str = "Deep analysis of arthouse and experimental cinema"
    SITE_TIMEZONE: str = "Europe/Amsterdam"

    REVALIDATION_WORKER_ENABLED: bool = True
    REVALIDATION_INTERVAL_SECONDS: int = 5
    RENDER_CACHE_MAX_ENTRIES: int = 1024

    LOG_DIR: str = "slowcinema/logs"
    LOG_TO_FILES: bool = False


settings = Settings()  # type: ignore
