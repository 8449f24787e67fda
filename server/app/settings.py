"""
ng-codefix Server Settings

Configuration management using pydantic settings.
Loads from environment variables with NG_CODEFIX_ prefix.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field
from typing import List, Optional


class Settings(BaseSettings):
    """
    Server configuration settings.

    Environment variables:
    - NG_CODEFIX_API_KEYS_RAW: Comma-separated list of valid API keys (empty disables auth)
    - NG_CODEFIX_MIN_CLIENT_VERSION: Minimum client version required (optional)
    - NG_CODEFIX_CONFIG_PATH: Engine YAML config; searched from the working directory if unset
    - NG_CODEFIX_LOG_LEVEL: Logging level name (default: INFO)
    - NG_CODEFIX_DEBUG: Enable debug mode (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="NG_CODEFIX_",
        env_file=".env",
        extra="ignore",
    )

    # Raw string field for comma-separated values
    api_keys_raw: str = ""

    # Client version enforcement (optional)
    min_client_version: Optional[str] = None

    # Engine configuration file
    config_path: Optional[str] = None

    log_level: str = "INFO"

    # Debug mode forces DEBUG logging
    debug: bool = False

    @computed_field
    @property
    def api_keys(self) -> List[str]:
        """Parse comma-separated API keys into list."""
        if not self.api_keys_raw:
            return []
        return [v.strip() for v in self.api_keys_raw.split(",") if v.strip()]

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


# Global settings instance
settings = Settings()
