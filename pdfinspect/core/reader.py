"""Reader capability used to populate an object store.

The object store never parses bytes itself.  It asks an :class:`ObjectReader`
for the in-use cross-reference entries of a document and for the object
behind each of them.  :class:`PypdfObjectReader` implements that capability
on top of :class:`pypdf.PdfReader`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, Sequence

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import IndirectObject

from .exceptions import EncryptedDocumentError, InvalidDocumentError, MalformedEntryError
from .utils import get_logger, resolve_path

__all__ = ["ObjectReader", "PypdfObjectReader"]

LOGGER = get_logger(__name__)


class ObjectReader(Protocol):
    """Protocol for the low-level access an object store needs."""

    @property
    def trailer(self) -> Any:
        """The trailer dictionary of the document."""

    def entry_count(self) -> int:
        """Return the number of in-use cross-reference entries."""

    def object_numbers(self) -> Sequence[tuple[int, int]]:
        """Return ``(number, generation)`` for every in-use entry, ascending."""

    def read_object(self, number: int, generation: int = 0) -> Any:
        """Read the object for one entry, raising :class:`MalformedEntryError`."""


class PypdfObjectReader:
    """:class:`ObjectReader` backed by a :class:`pypdf.PdfReader`."""

    def __init__(self, reader: PdfReader) -> None:
        self.reader = reader
        self._entries: list[tuple[int, int]] | None = None

    @classmethod
    def open(
        cls,
        source: str | Path,
        *,
        password: str | None = None,
        strict: bool = False,
    ) -> "PypdfObjectReader":
        path = resolve_path(source)
        if not path.exists() or not path.is_file():
            raise InvalidDocumentError(f"PDF file not found: {path}")

        try:
            reader = PdfReader(str(path), strict=strict)
        except PdfReadError as exc:
            raise InvalidDocumentError(f"Corrupted or invalid PDF file: {path}. Error: {exc}") from exc
        except Exception as exc:
            raise InvalidDocumentError(f"Unexpected error reading PDF: {path}. Error: {exc}") from exc

        if reader.is_encrypted:
            try:
                decrypted = reader.decrypt(password if password is not None else "")
            except Exception as exc:
                raise EncryptedDocumentError(f"Unable to decrypt PDF: {path}. Error: {exc}") from exc
            if decrypted == 0:
                if password is None:
                    raise EncryptedDocumentError()
                raise EncryptedDocumentError("Failed to decrypt PDF with supplied password.")

        LOGGER.debug("Opened %s", path)
        return cls(reader)

    @property
    def trailer(self) -> Any:
        return self.reader.trailer

    def entry_count(self) -> int:
        return len(self.object_numbers())

    def object_numbers(self) -> Sequence[tuple[int, int]]:
        if self._entries is None:
            self._entries = self._collect_entries()
            LOGGER.debug("Cross-reference table lists %d objects", len(self._entries))
        return self._entries

    def read_object(self, number: int, generation: int = 0) -> Any:
        try:
            obj = self.reader.get_object(IndirectObject(number, generation, self.reader))
        except PdfReadError as exc:
            raise MalformedEntryError(number, str(exc)) from exc
        except Exception as exc:
            raise MalformedEntryError(number, f"unexpected error: {exc}") from exc
        if obj is None:
            raise MalformedEntryError(number, "no object at the recorded location")
        return obj

    def _collect_entries(self) -> list[tuple[int, int]]:
        newest: dict[int, int] = {}
        free_entries = getattr(self.reader, "xref_free_entry", None) or {}
        for generation, table in self.reader.xref.items():
            free = free_entries.get(generation, {})
            for number in table:
                if number <= 0 or free.get(number, False):
                    continue
                if generation > newest.get(number, -1):
                    newest[number] = generation
        # Objects stored inside object streams always have generation 0.
        for number in getattr(self.reader, "xref_objStm", None) or {}:
            newest.setdefault(number, 0)
        return sorted(newest.items())
