from __future__ import annotations

import os
from dataclasses import dataclass, asdict

from dotenv import load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class RegistrySettings:
    """Runtime config shared by registries and the logging helper."""

    logger_name: str = "watch_notify"
    log_level: str = "WARNING"
    log_tracebacks: bool = True  # attach exc_info when an observer fails

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_env(cls, prefix: str = "WATCH_NOTIFY_", env_file: str | None = ".env") -> "RegistrySettings":
        """Build settings from environment variables, after loading ``env_file`` if present."""
        if env_file:
            load_dotenv(env_file, override=False)

        defaults = cls()
        tracebacks = os.getenv(f"{prefix}LOG_TRACEBACKS")
        return cls(
            logger_name=os.getenv(f"{prefix}LOGGER_NAME", defaults.logger_name),
            log_level=os.getenv(f"{prefix}LOG_LEVEL", defaults.log_level).upper(),
            log_tracebacks=defaults.log_tracebacks if tracebacks is None else tracebacks.strip().lower() in _TRUTHY,
        )
