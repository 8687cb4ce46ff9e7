"""Application configuration.

Settings come from environment variables, optionally loaded from a ``.env``
file in the working directory:

    PROJECTS_DIR                 Where project directories live (./projects)
    TEMPLATES_DIR                Root of the category/template tree (./templates)
    LOG_LEVEL                    Logging level name (INFO)
    HOST / PORT                  Bind address for uvicorn (0.0.0.0 / 8000)
    LOAD_TEMPLATES_ON_STARTUP    Load templates when the app starts (true)
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Runtime settings for the IDE backend."""

    projects_dir: Path = Field(Path("./projects"), description="Root directory for projects")
    templates_dir: Path = Field(Path("./templates"), description="Root directory for templates")
    log_level: str = Field("INFO", description="Logging level name")
    host: str = Field("0.0.0.0", description="Server bind host")
    port: int = Field(8000, gt=0, lt=65536, description="Server bind port")
    load_templates_on_startup: bool = Field(True, description="Load templates at startup")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (and ``.env`` if present)."""
        load_dotenv()
        return cls(
            projects_dir=Path(os.getenv("PROJECTS_DIR", "./projects")),
            templates_dir=Path(os.getenv("TEMPLATES_DIR", "./templates")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            load_templates_on_startup=_env_flag("LOAD_TEMPLATES_ON_STARTUP", True),
        )


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging with a single stream handler."""
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
