"""
Configuration model for the RQG character importer.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Namespace for settings and localized messages
MODULE_ID = "rqg-character-importer"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ImporterSettings(BaseModel):
    """Settings for the importer and its tool server.

    Values are read once at startup and passed explicitly to the components
    that need them; nothing in the import pipeline reads the environment.
    """

    module_id: str = Field(
        default=MODULE_ID,
        frozen=True,
        description="Module identifier used to namespace messages",
    )
    storage_dir: Path = Field(
        default=Path("rqg_data"),
        description="Directory of the JSON document store",
    )
    language: str = Field(
        default="en",
        description="Language of the message catalog",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name",
    )
    fetch_timeout: float = Field(
        default=10.0,
        description="Timeout in seconds when fetching a character from a URL",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is a standard level name."""
        if v.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(_LOG_LEVELS))}")
        return v.upper()

    @field_validator("fetch_timeout")
    @classmethod
    def validate_fetch_timeout(cls, v: float) -> float:
        """Ensure the fetch timeout is positive."""
        if v <= 0:
            raise ValueError("fetch_timeout must be positive")
        return v

    @classmethod
    def from_env(cls) -> "ImporterSettings":
        """Build settings from the environment, loading a ``.env`` file if present."""
        load_dotenv()
        values: dict[str, str] = {}
        env_map = {
            "storage_dir": "RQG_IMPORTER_STORAGE_DIR",
            "language": "RQG_IMPORTER_LANG",
            "log_level": "RQG_IMPORTER_LOG_LEVEL",
            "fetch_timeout": "RQG_IMPORTER_FETCH_TIMEOUT",
        }
        for field_name, env_name in env_map.items():
            value = os.getenv(env_name)
            if value:
                values[field_name] = value
        return cls(**values)
