"""
Logging setup plus an append-only JSONL event log.

Usage:
    from tripplanner.modules.observability.logger import StructuredLogger

    events = StructuredLogger()
    events.perf("ItineraryBuilder.build", started, destination="Tokyo")

Events land in  <LOGS_DIR>/<stream>.jsonl  (default: logs/ under the current
working directory), one JSON object per line.  A failed write is logged as a
warning and the event dropped.  configure_logging() sets up the stdlib root
logger behind every module's logging.getLogger(__name__).
"""

from __future__ import annotations

import json
import logging
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any

from tripplanner import config

logger = logging.getLogger(__name__)


def _default_logs_dir() -> Path:
    return Path(config.LOGS_DIR) if config.LOGS_DIR else Path.cwd() / "logs"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger (no-op if handlers already exist)."""
    logging.basicConfig(
        level=(level or config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


class StructuredLogger:
    """Thread-safe JSONL writer; one file per stream, opened lazily."""

    def __init__(self, logs_dir: Path | str | None = None, stream: str = "planner") -> None:
        self.logs_dir = Path(logs_dir) if logs_dir else _default_logs_dir()
        self.stream = stream
        self._lock = threading.Lock()
        self._files: dict[str, IO[str]] = {}

    def log(self, event_type: str, payload: dict[str, Any], stream: str | None = None) -> None:
        """Append one {timestamp, stream, event_type, payload} record."""
        name = stream or self.stream
        line = json.dumps(
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "stream": name,
                "event_type": event_type,
                "payload": payload,
            },
            default=str,
            ensure_ascii=False,
        )
        with self._lock:
            try:
                fh = self._files.get(name) or self._open(name)
                fh.write(line + "\n")
                fh.flush()
            except OSError as exc:
                # best-effort: callers never see I/O errors
                logger.warning("Dropped %s event for stream %r: %s", event_type, name, exc)

    def perf(self, component: str, started: float, **fields: Any) -> None:
        """PERFORMANCE event; *started* is a time.perf_counter() reading."""
        payload = {"component": component, **fields}
        payload["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
        self.log("PERFORMANCE", payload)

    def close(self) -> None:
        with self._lock:
            for fh in self._files.values():
                fh.close()
            self._files.clear()

    def _open(self, name: str) -> IO[str]:
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        fh = open(self.logs_dir / f"{name}.jsonl", "a", encoding="utf-8")  # noqa: SIM115
        self._files[name] = fh
        return fh
