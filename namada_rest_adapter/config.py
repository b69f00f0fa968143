"""Configuration management using pydantic-settings."""

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the REST adapter process."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Upstream node, e.g. RPC="http://localhost:26657"
    rpc: AnyHttpUrl
    upstream_timeout: float = Field(default=10.0, gt=0)
    height_consistent: bool = False

    # Namada address human-readable part
    address_hrp: str = "tnam"

    # Listener
    host: str = "0.0.0.0"
    port: int = Field(default=1317, ge=0, le=65535)

    # CORS policy
    cors_origins: list[str] = ["http://localhost:1317"]
    cors_allow_credentials: bool = True

    log_level: str = "info"
