from typing import Literal

from pydantic import HttpUrl, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "worklog"
    API_V1_STR: str = "/api"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Task listing
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100
    DEFAULT_SORT_BY: str = "workDate"
    DEFAULT_SORT_ORDER: Literal["asc", "desc"] = "desc"

    # Mock API behaviour
    MOCK_SCENARIO: str = "normal"
    SIMULATE_LATENCY: bool = False
    SIMULATED_LATENCY_SECONDS: float = 0.2
    DELAY_SCENARIO_SECONDS: float = 3.0
    SEED_DATASET: Literal["normal", "large", "empty"] = "normal"

    # Master data source; None serves the bundled fixtures in-process
    MASTER_API_BASE_URL: HttpUrl | None = None
    MASTER_API_TIMEOUT_SECONDS: float = 10.0
    REFRESH_MASTERS_ON_REQUEST: bool = True

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def master_api_url(self) -> str | None:
        if self.MASTER_API_BASE_URL is None:
            return None
        return str(self.MASTER_API_BASE_URL).rstrip("/")

    @model_validator(mode="after")
    def _check_page_limits(self) -> Self:
        if self.DEFAULT_PAGE_LIMIT < 1:
            raise ValueError("DEFAULT_PAGE_LIMIT must be at least 1")
        if self.MAX_PAGE_LIMIT < self.DEFAULT_PAGE_LIMIT:
            raise ValueError("MAX_PAGE_LIMIT must not be below DEFAULT_PAGE_LIMIT")
        return self


settings = Settings()


def get_settings() -> Settings:
    return settings
