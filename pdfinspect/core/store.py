"""Store of the indirect objects of one document."""

from __future__ import annotations

import threading
from typing import Any, Iterator

from pypdf.generic import IndirectObject

from .exceptions import LoadCancelledError, MalformedEntryError
from .objects import MissingObject
from .progress import ProgressSink
from .reader import ObjectReader
from .utils import get_logger

__all__ = ["ObjectStore", "populate_store"]

LOGGER = get_logger(__name__)


class ObjectStore:
    """Maps object numbers to the objects read from a cross-reference table.

    The store is filled one object at a time through :meth:`store_next_object`
    so that a caller can report progress between steps.  Once an object number
    is stored its value never changes.
    """

    def __init__(self, reader: ObjectReader) -> None:
        self.reader = reader
        self._pending: list[tuple[int, int]] | None = None
        self._objects: dict[int, Any] = {}
        self._generations: dict[int, int] = {}
        self._position = 0

    @property
    def _entries(self) -> list[tuple[int, int]]:
        if self._pending is None:
            self._pending = list(self.reader.object_numbers())
        return self._pending

    @property
    def xref_maximum(self) -> int:
        """Total number of cross-reference entries to store."""

        return len(self._entries)

    @property
    def current(self) -> int:
        """Number of objects stored so far."""

        return len(self._objects)

    @property
    def is_complete(self) -> bool:
        return self._position >= len(self._entries)

    @property
    def trailer(self) -> Any:
        return self.reader.trailer

    def store_next_object(self) -> bool:
        """Read and store the next entry; return ``False`` once exhausted."""

        if self.is_complete:
            return False
        number, generation = self._entries[self._position]
        if number in self._objects:
            raise MalformedEntryError(number, "object number listed twice")
        obj = self.reader.read_object(number, generation)
        self._objects[number] = obj
        self._generations[number] = generation
        self._position += 1
        return True

    def get(self, number: int, default: Any = None) -> Any:
        return self._objects.get(number, default)

    def generation(self, number: int) -> int:
        return self._generations.get(number, 0)

    def resolve(self, obj: Any) -> Any:
        """Dereference ``obj`` against the store.

        Indirect references to numbers that are not stored resolve to a
        :class:`MissingObject`; every other object is returned unchanged.
        """

        if not isinstance(obj, IndirectObject):
            return obj
        if obj.idnum not in self._objects:
            return MissingObject(obj.idnum, obj.generation)
        return self._objects[obj.idnum]

    def numbers(self) -> list[int]:
        return sorted(self._objects)

    def items(self) -> Iterator[tuple[int, Any]]:
        for number in self.numbers():
            yield number, self._objects[number]

    def __contains__(self, number: object) -> bool:
        return number in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[int]:
        return iter(self.numbers())

    def __repr__(self) -> str:
        return f"ObjectStore(current={self.current}, total={self.xref_maximum})"


def populate_store(
    store: ObjectStore,
    progress: ProgressSink,
    cancel_event: threading.Event | None = None,
) -> ObjectStore:
    """Fill ``store`` entry by entry, reporting every step to ``progress``.

    ``progress.set_total(0)`` is reported exactly once, as the last report,
    whether the table was exhausted or reading failed.
    """

    try:
        total = store.xref_maximum
        LOGGER.info("Reading %d cross-reference entries", total)
        progress.set_message("Reading the Cross-Reference table")
        if total:
            progress.set_total(total)
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise LoadCancelledError()
            if not store.store_next_object():
                break
            progress.set_value(store.current)
    finally:
        progress.set_total(0)
    LOGGER.info("Stored %d objects", store.current)
    return store
