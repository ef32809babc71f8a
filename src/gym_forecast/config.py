import logging
import os
from dataclasses import dataclass

LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class Config:
    log_format: str = "text"
    log_level: str = "INFO"
    snapshot_interval: int = 1

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("GYM_FORECAST_LOG_FORMAT", "text")
        if log_format not in LOG_FORMATS:
            raise RuntimeError(f"GYM_FORECAST_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}")

        log_level = os.environ.get("GYM_FORECAST_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise RuntimeError(f"GYM_FORECAST_LOG_LEVEL is not a logging level: {log_level}")

        try:
            snapshot_interval = int(os.environ.get("GYM_FORECAST_SNAPSHOT_INTERVAL", "1"))
        except ValueError:
            raise RuntimeError("GYM_FORECAST_SNAPSHOT_INTERVAL must be an integer") from None
        if snapshot_interval < 1:
            raise RuntimeError("GYM_FORECAST_SNAPSHOT_INTERVAL must be >= 1")

        return cls(log_format=log_format, log_level=log_level, snapshot_interval=snapshot_interval)
