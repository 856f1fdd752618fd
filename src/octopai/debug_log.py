"""Debug logging with a ring buffer.

Captures both ``log`` calls and Python logging module records into a bounded
buffer. Entries are also forwarded to Textual's devtools log, and the buffer
can be exported to a file when the app exits.
"""

from __future__ import annotations

import logging
import os
import time
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from octopai.constants import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH


class LogSource(Enum):
    """Source of the log entry."""

    APP = "APP"
    LOGGING = "LOGGING"


@dataclass(slots=True)
class LogEntry:
    """A captured log entry."""

    group: str  # Level name (DEBUG, INFO, WARNING, ERROR)
    message: str
    timestamp: float
    source: LogSource


log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)


class OctopaiLogger:
    """Logger that keeps entries for export and passes them to Textual."""

    def __call__(self, *args: object, **kwargs: Any) -> None:
        self.info(*args, **kwargs)

    def _log(self, level: str, *args: object, **kwargs: Any) -> None:
        output = " ".join(str(arg) for arg in args)
        if kwargs:
            key_values = " ".join(f"{key}={value!r}" for key, value in kwargs.items())
            output = f"{output} {key_values}" if output else key_values

        if len(output) > MAX_LOG_MESSAGE_LENGTH:
            output = output[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"

        log_buffer.append(
            LogEntry(
                group=level,
                message=output,
                timestamp=time.time(),
                source=LogSource.APP,
            )
        )

        try:
            from textual import log as textual_log

            textual_log(output)
        except Exception:
            pass

    def debug(self, *args: object, **kwargs: Any) -> None:
        self._log("DEBUG", *args, **kwargs)

    def info(self, *args: object, **kwargs: Any) -> None:
        self._log("INFO", *args, **kwargs)

    def warning(self, *args: object, **kwargs: Any) -> None:
        self._log("WARNING", *args, **kwargs)

    def error(self, *args: object, **kwargs: Any) -> None:
        self._log("ERROR", *args, **kwargs)


class DebugLogHandler(logging.Handler):
    """Logging handler that captures records into the debug buffer."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            log_buffer.append(
                LogEntry(
                    group=record.levelname,
                    message=msg,
                    timestamp=record.created,
                    source=LogSource.LOGGING,
                )
            )
        except Exception:
            self.handleError(record)


_debug_logging_initialized: bool = False


def setup_debug_logging() -> None:
    """Attach the buffer handler to the root logger. Idempotent."""
    global _debug_logging_initialized

    if _debug_logging_initialized:
        return

    handler = DebugLogHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logging.getLogger().addHandler(handler)

    _debug_logging_initialized = True
    log.info("Debug logging initialized")


def clear_log_buffer() -> None:
    log_buffer.clear()


def export_logs_to_file(file_path: str | Path) -> int:
    """Write every buffered entry to ``file_path``.

    Returns:
        Number of log entries written
    """
    output_path = Path(file_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", encoding="utf-8") as f:
        f.write("# Octopai Debug Log Export\n")
        f.write(f"# Total entries: {len(log_buffer)}\n\n")
        for entry in log_buffer:
            ts = datetime.fromtimestamp(entry.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
            source = "[PY]" if entry.source == LogSource.LOGGING else "[APP]"
            f.write(f"{ts} {source} [{entry.group}] {entry.message}\n")

    return len(log_buffer)


def debug_export_enabled() -> bool:
    """True when OCTOPAI_DEBUG is "1" or "true"; the app then exports the buffer on exit."""
    return os.environ.get("OCTOPAI_DEBUG", "").lower() in ("1", "true")


log = OctopaiLogger()
