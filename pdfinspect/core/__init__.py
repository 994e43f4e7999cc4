"""Core object model, reader capability and object store."""

from __future__ import annotations

from .exceptions import (
    EncryptedDocumentError,
    InvalidDocumentError,
    LoadCancelledError,
    MalformedEntryError,
    PdfInspectError,
)
from .objects import MissingObject, ObjectKind, caption, kind_of, render
from .progress import NullProgress, ProgressSink, RichProgressSink
from .reader import ObjectReader, PypdfObjectReader
from .store import ObjectStore, populate_store

__all__ = [
    "EncryptedDocumentError",
    "InvalidDocumentError",
    "LoadCancelledError",
    "MalformedEntryError",
    "PdfInspectError",
    "MissingObject",
    "ObjectKind",
    "caption",
    "kind_of",
    "render",
    "NullProgress",
    "ProgressSink",
    "RichProgressSink",
    "ObjectReader",
    "PypdfObjectReader",
    "ObjectStore",
    "populate_store",
]
