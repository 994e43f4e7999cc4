"""Application context shared by pdfinspect shells."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from .core.progress import NullProgress, ProgressSink
from .core.reader import PypdfObjectReader
from .core.utils import resolve_path
from .worker import ForegroundQueue, LoadCoordinator

DEFAULT_CONFIG: dict[str, Any] = {
    "max_depth": 3,
}


@dataclass
class InspectionContext:
    """Holds the configuration and the load coordinator of one shell."""

    input_path: Path | None = None
    password: str | None = None
    strict: bool = False
    config: dict[str, Any] = field(default_factory=dict)
    progress_factory: Callable[[], ProgressSink] = NullProgress
    foreground: ForegroundQueue = field(default_factory=ForegroundQueue)
    coordinator: LoadCoordinator | None = None

    def __post_init__(self) -> None:
        if self.input_path is not None:
            self.input_path = resolve_path(self.input_path)
        self.config = {**DEFAULT_CONFIG, **self.config}
        if self.coordinator is None:
            self.coordinator = LoadCoordinator(self.foreground.post, self.progress_factory)

    @property
    def max_depth(self) -> int:
        return int(self.config["max_depth"])

    def open_reader(self) -> PypdfObjectReader:
        if self.input_path is None:
            raise ValueError("InspectionContext requires an input_path to open a reader")
        return PypdfObjectReader.open(self.input_path, password=self.password, strict=self.strict)
