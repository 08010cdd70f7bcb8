import os
from dataclasses import dataclass
from typing import Literal

LogLevel = Literal["debug", "info", "warning", "error"]

PORT = 8080
SAMPLE_INTERVAL_SECONDS = 5.0


@dataclass(frozen=True)
class Settings:
    log_level: LogLevel = "info"
    port: int = PORT
    sample_interval_seconds: float = SAMPLE_INTERVAL_SECONDS


def load_settings() -> Settings:
    # Port and sampling interval are fixed; only verbosity comes from the env.
    log_level_raw = os.environ.get("LOG_LEVEL", "info").strip().lower()
    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )
    return Settings(log_level=log_level_raw)  # type: ignore[arg-type]
