from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    SLACK_WEBHOOK_URL: str | None = None

    # Sources
    OFAC_URL: str = "https://www.treasury.gov/ofac/downloads/sdn.xml"
    EU_SANCTIONS_URL: str = (
        "https://webgate.ec.europa.eu/fsd/fsf/public/files/xmlFullSanctionsList_1_1/content"
        "?token=dG9rZW4tMjAxNw"
    )
    FETCH_TIMEOUT_SECONDS: float = 30.0

    # Refresh schedule
    REFRESH_INTERVAL_SECONDS: int = 6 * 60 * 60  # 6 hours
    REFRESH_ENABLED: bool = True  # Enable/disable the recurring refresh loop
    REFRESH_ON_STARTUP: bool = True  # Fetch both datasets before serving

    # Persisted snapshots
    CACHE_DIR: str = "."
    OFAC_CACHE_FILE: str = "ofac-cache.json"
    EU_CACHE_FILE: str = "eu-sanctions-cache.json"

    # Search
    SEARCH_DEFAULT_LIMIT: int = 100

    # Docs Configuration
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "dev"

    @property
    def debug_enabled(self) -> bool:
        """Debug mode is only enabled in development."""
        return self.is_development

    @property
    def effective_log_level(self) -> str:
        """Return appropriate log level based on environment."""
        if self.is_production:
            # In production, minimum INFO level (ignore DEBUG)
            return self.LOG_LEVEL if self.LOG_LEVEL.upper() != "DEBUG" else "INFO"
        return self.LOG_LEVEL

    @property
    def docs_enabled(self) -> bool:
        """Swagger/ReDoc docs enabled based on environment or override."""
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development

    @property
    def ofac_cache_path(self) -> Path:
        return Path(self.CACHE_DIR) / self.OFAC_CACHE_FILE

    @property
    def eu_cache_path(self) -> Path:
        return Path(self.CACHE_DIR) / self.EU_CACHE_FILE


settings = Settings()
