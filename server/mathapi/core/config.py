from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    api_title: str = "MCP Math API"
    api_version: str = "1.0.0"
    service_name: str = "mcp-math-api"

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    mcp_protocol_version: str = "2024-11-05"
    mcp_server_name: str = "mcp-math-server"
    mcp_server_version: str = "0.1.0"

    normalizer_max_passes: int = Field(64, ge=1)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def resolved_cors_origins(self) -> List[str]:
        """
        Returns the configured CORS origins without trailing slashes, deduped.
        """
        normalized: list[str] = []
        for origin in self.cors_origins:
            if not origin:
                continue
            cleaned = origin.rstrip("/")
            if cleaned not in normalized:
                normalized.append(cleaned)
        return normalized


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
