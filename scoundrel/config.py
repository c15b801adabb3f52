"""
Runtime configuration read from the environment.

    SCOUNDREL_ENV         development | production (default development)
    SCOUNDREL_SAVE_DIR    directory for saved games (default ~/.scoundrel/saves)
    SCOUNDREL_LOG_LEVEL   logging level name (default WARNING)
    ALLOWED_ORIGINS       comma-separated CORS origins for the API (default *)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    save_dir: str | None = None
    log_level: str = "WARNING"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("SCOUNDREL_ENV", "development"),
            save_dir=os.getenv("SCOUNDREL_SAVE_DIR") or None,
            log_level=os.getenv("SCOUNDREL_LOG_LEVEL", "WARNING").upper(),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )


def configure_logging(level: str | None = None):
    """Set up root logging once for CLI and server entry points."""
    level = level or Settings.from_env().log_level
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=LOG_FORMAT)
