"""Progress reporting — protocol plus a rich progress bar implementation."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TextColumn


class ProgressNotifier(Protocol):
    """Observer for traversal progress. Must not touch traversal state."""

    def start(self, total: int) -> None: ...

    def update(self, processed: int, total: int, layer: str) -> None: ...

    def finish(self) -> None: ...


class NullProgress:
    """Discards every notification."""

    def start(self, total: int) -> None:
        pass

    def update(self, processed: int, total: int, layer: str) -> None:
        pass

    def finish(self) -> None:
        pass


class RichProgress:
    """Terminal progress bar showing the layer being checked."""

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total}"),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            console=console,
            transient=True,
        )
        self._task: TaskID | None = None

    def start(self, total: int) -> None:
        self._progress.start()
        self._task = self._progress.add_task("Preflight", total=total)

    def update(self, processed: int, total: int, layer: str) -> None:
        if self._task is None:
            return
        self._progress.update(
            self._task,
            completed=processed,
            description=f"Checking '{layer}'",
        )

    def finish(self) -> None:
        self._progress.stop()
        self._task = None
