"""Progress sinks fed by the object store loader.

A sink receives ``set_total``, ``set_value`` and ``set_message`` calls while
a document loads.  ``set_total(0)`` means "no longer loading".
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TaskProgressColumn, TextColumn, TimeRemainingColumn

__all__ = ["ProgressSink", "NullProgress", "RichProgressSink"]


class ProgressSink(Protocol):
    def set_total(self, total: int) -> None:
        ...

    def set_value(self, value: int) -> None:
        ...

    def set_message(self, message: str) -> None:
        ...

    def close(self) -> None:
        ...


class NullProgress:
    """Sink that ignores every report."""

    def set_total(self, total: int) -> None:
        pass

    def set_value(self, value: int) -> None:
        pass

    def set_message(self, message: str) -> None:
        pass

    def close(self) -> None:
        pass


class RichProgressSink:
    """Shows loading progress as a :mod:`rich` progress bar."""

    def __init__(self, description: str = "Reading PDF file", *, console: Console | None = None) -> None:
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console,
            transient=True,
        )
        self._task: TaskID | None = None
        self._description = description

    def _ensure_task(self) -> TaskID:
        if self._task is None:
            self._progress.start()
            self._task = self._progress.add_task(self._description, total=None)
        return self._task

    def set_total(self, total: int) -> None:
        task = self._ensure_task()
        if total:
            self._progress.update(task, total=total)
        else:
            self._progress.update(task, total=None)

    def set_value(self, value: int) -> None:
        self._progress.update(self._ensure_task(), completed=value)

    def set_message(self, message: str) -> None:
        self._progress.update(self._ensure_task(), description=message)

    def close(self) -> None:
        if self._task is not None:
            self._progress.stop()
            self._task = None
