"""Settings for the propstack library itself."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class PropstackSettings(BaseSettings):
    """Library settings read from PROPSTACK_* environment variables.

    These control how propstack reports on resolution, never what it
    resolves.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROPSTACK_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default="INFO", description="Logging level")
    log_format: LogFormat = Field(
        default="console",
        description="Log renderer: json for production, console for development",
    )
    redact_secrets: bool = Field(
        default=True,
        description="Mask secret-looking property values in log output",
    )
