"""Environment settings using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from wallet_gateway.domain.configuration import Configuration


class Settings(BaseSettings):
    """Process-level settings loaded from WALLET_GATEWAY_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="WALLET_GATEWAY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Configuration file (.py, .json, .yaml) loaded by load_configuration()
    config_file: Optional[str] = None

    # Service
    service_name: str = "wallet-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: int = 30


settings = Settings()


def load_configuration(current: Settings | None = None) -> Configuration:
    """Build the gateway Configuration from the configured file, or defaults"""
    current = current or settings
    if current.config_file:
        return Configuration.load_from_file(current.config_file)
    return Configuration()
