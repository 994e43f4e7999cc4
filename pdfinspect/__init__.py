"""Inspect the indirect object graph of PDF documents.

The object store of a document is populated in the background from its
cross-reference table; the object tree built on top of it turns the object
graph, back-references included, into a finite tree a shell can browse.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .context import InspectionContext
from .core.exceptions import (
    EncryptedDocumentError,
    InvalidDocumentError,
    LoadCancelledError,
    MalformedEntryError,
    PdfInspectError,
)
from .core.objects import MissingObject, ObjectKind, caption, kind_of, render
from .core.progress import NullProgress, ProgressSink, RichProgressSink
from .core.reader import ObjectReader, PypdfObjectReader
from .core.store import ObjectStore, populate_store
from .nodetypes import NOT_INDIRECT, NodeVariant, ObjectTreeNode, TreeNodeFactory
from .worker import ForegroundQueue, LoadCoordinator, LoadState, StoreConsumer

__all__ = [
    "__version__",
    "InspectionContext",
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
    "NOT_INDIRECT",
    "NodeVariant",
    "ObjectTreeNode",
    "TreeNodeFactory",
    "ForegroundQueue",
    "LoadCoordinator",
    "LoadState",
    "StoreConsumer",
]
