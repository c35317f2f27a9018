from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = {
    "production": "https://api.increase.com",
    "sandbox": "https://sandbox.increase.com",
}


class ClientConfig(BaseSettings):
    """Connection settings, read from INCREASE_* environment variables (or .env)."""

    model_config = SettingsConfigDict(
        env_prefix="INCREASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: Optional[str] = None
    environment: Literal["production", "sandbox"] = "production"
    base_url: Optional[str] = Field(
        default=None,
        description="Overrides the URL implied by `environment`.",
    )
    timeout: float = Field(default=30.0, gt=0)
    user_agent: str = "increase-python/0.1.0"

    @property
    def resolved_base_url(self) -> str:
        return (self.base_url or ENVIRONMENTS[self.environment]).rstrip("/")
