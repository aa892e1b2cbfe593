from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_lowercase, normalize_level_name


class Settings(BaseSettings):
    """
    Logging settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Sink
    LOG_LEVEL: Literal["trace", "debug", "info", "warn", "error"] = "info"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_OUTPUT: str = "stderr"  # "stderr" | "stdout" | path to a file
    LOG_REDACT: bool = True
    LOGGER_NAME: str = "glogger"

    # Correlation
    REQUEST_ID_HEADER: str = "x-request-id"
    REQUEST_ID_ECHO: bool = False

    # --- Derived settings ---
    @property
    def LOG_TO_STREAM(self) -> bool:
        """
        True when LOG_OUTPUT names one of the standard streams rather than a file path.
        """
        return self.LOG_OUTPUT in ("stderr", "stdout")

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL before validation.

        Runs before the Literal check (mode="before"), so "TRACE", " Info " and the
        stdlib spelling "WARNING" are all accepted. Anything else still fails with a
        pydantic ValidationError when Settings is constructed.
        """
        return normalize_level_name(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("REQUEST_ID_HEADER", mode="before")
    def normalize_request_id_header(cls, v: str | None) -> str | None:
        # ASGI header names are lowercase
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        # Load environment variables from a .env file located next to the package root.
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() is good for performance.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
