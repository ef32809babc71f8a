"""Structured logging for gym-forecast runs.

Controlled via GYM_FORECAST_LOG_FORMAT env var: "json" or "text" (default).
Engine records carry the configuration name and, inside the day loop, the
global day as ``gym_forecast_*`` extras; both formatters surface them.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

EXTRA_PREFIX = "gym_forecast_"


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        for key, value in record.__dict__.items():
            if key.startswith(EXTRA_PREFIX):
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Plain lines, suffixed with ``[config day N]`` for engine records."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        parts = []
        config = getattr(record, "gym_forecast_config", None)
        if config is not None:
            parts.append(str(config))
        day = getattr(record, "gym_forecast_day", None)
        if day is not None:
            parts.append(f"day {day}")
        return f"{line} [{' '.join(parts)}]" if parts else line


class RunLogger(logging.LoggerAdapter):
    """Adds ``gym_forecast_config`` and the current ``gym_forecast_day`` to records.

    The engine moves ``day`` forward as it loops; records logged outside the
    loop leave it unset.
    """

    def __init__(self, logger: logging.Logger, config_name: str):
        super().__init__(logger, {"gym_forecast_config": config_name})
        self.day: int | None = None

    def process(self, msg, kwargs):
        extra = dict(self.extra)
        if self.day is not None:
            extra["gym_forecast_day"] = self.day
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(log_format: str, level: int = logging.INFO) -> None:
    """Configure the root logger with either JSON or plaintext output on stderr."""
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else TextFormatter())
    root.addHandler(handler)
