from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read from environment variables."""

    port: int = 8000
    reload: bool = False
    log_level: str = "INFO"
    default_precision: int = 2  # fractional digits when no precision is requested

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            port=int(os.environ.get("PORT", 8000)),
            reload=os.environ.get("RELOAD", "false").lower() == "true",
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            default_precision=int(os.environ.get("LP_DEFAULT_PRECISION", 2)),
        )
