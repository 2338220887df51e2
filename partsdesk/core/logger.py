from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass
from typing import Any

from partsdesk.core.config import settings


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - formatting logic
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def init_logging(level: int | None = None) -> None:
    if logging.getLogger().handlers:
        return
    effective_level = level or getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_FORMAT.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.setLevel(effective_level)
    root.addHandler(handler)


@dataclass
class LogThrottle:
    """Lets a repeating log line through at most once per ``throttle_window`` seconds.

    Owned by whichever component emits the noisy line, so two components never
    share suppression state.
    """

    throttle_window: float = 60.0
    last_logged_at: float | None = None
    suppressed: int = 0

    def should_log(self, now: float | None = None) -> bool:
        now = time.monotonic() if now is None else now
        if self.last_logged_at is None or now - self.last_logged_at >= self.throttle_window:
            self.last_logged_at = now
            return True
        self.suppressed += 1
        return False

    def drain_suppressed(self) -> int:
        """Return and reset the number of events swallowed since the last emitted line."""
        count, self.suppressed = self.suppressed, 0
        return count
