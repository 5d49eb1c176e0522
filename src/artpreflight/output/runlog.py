"""Run log — collects the per-run trace and writes it beside the document."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

RUN_LOGGER_NAME = "artpreflight.runlog"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


class RunLog(logging.Handler):
    """Buffers run-log records in memory until the run decides to keep them.

    Use as a context manager: the handler is attached to the run logger on
    entry and detached on exit.
    """

    def __init__(self) -> None:
        super().__init__(level=logging.INFO)
        self.setFormatter(
            logging.Formatter("[%(asctime)s] %(message)s", datefmt=TIMESTAMP_FORMAT)
        )
        self.lines: list[str] = []
        self._logger = logging.getLogger(RUN_LOGGER_NAME)
        self._saved_level = logging.NOTSET
        self._saved_propagate = True

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(self.format(record))

    def __enter__(self) -> RunLog:
        self._saved_level = self._logger.level
        self._saved_propagate = self._logger.propagate
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        self._logger.addHandler(self)
        return self

    def __exit__(self, *exc: object) -> None:
        self._logger.removeHandler(self)
        self._logger.setLevel(self._saved_level)
        self._logger.propagate = self._saved_propagate

    def write(self, path: str | Path) -> Path:
        """Write the buffered lines under a timestamped header."""
        path = Path(path)
        header = f"=== Preflight Log ({datetime.now().strftime(TIMESTAMP_FORMAT)}) ==="
        path.write_text("\n".join([header, *self.lines]) + "\n", encoding="utf-8")
        return path
