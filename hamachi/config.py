"""
Configuration management for Hamachi.

Settings are read from ``HAMACHI_*`` environment variables or a ``.env``
file. The construction settings provide the defaults for any option a caller
does not pass explicitly.
"""

from typing import Any, Dict, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="HAMACHI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Construction defaults
    include_unknown_fields: bool = Field(
        default=True, description="Retain undeclared keys of the input snapshot"
    )
    check_types: bool = Field(
        default=True, description="Validate every field during construction"
    )
    freeze: bool = Field(
        default=False, description="Make constructed instances immutable"
    )

    # Logging
    log_level: str = Field(default="WARNING")
    log_format: Literal["json", "console"] = Field(default="console")

    def construction_defaults(self) -> Dict[str, Any]:
        return {
            "include_unknown_fields": self.include_unknown_fields,
            "check_types": self.check_types,
            "freeze": self.freeze,
        }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get engine settings."""
    return settings
