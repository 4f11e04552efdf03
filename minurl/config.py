"""Runtime configuration for minurl."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROFILE_CHOICES = ("careful", "common", "default")


class Settings(BaseSettings):
    """minurl settings, read from MINURL_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MINURL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    json_logs: bool = False

    # Profile used by the CLI when --profile is not given
    profile: str = "common"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Convert log level to uppercase."""
        return v.upper()

    @field_validator("profile")
    @classmethod
    def validate_profile(cls, v: str) -> str:
        """Accept only known profile names."""
        v = v.lower()
        if v not in PROFILE_CHOICES:
            raise ValueError(f"Unknown profile '{v}', expected one of {', '.join(PROFILE_CHOICES)}")
        return v


# Global settings instance (lazy loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
