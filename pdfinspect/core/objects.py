"""Classification and textual rendering of PDF objects.

Objects are the generic object classes of :mod:`pypdf`.  This module maps
them onto the closed set of kinds the object tree knows about and renders
them the way they are written in a PDF file, without ever dereferencing an
indirect reference.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    ByteStringObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NullObject,
    StreamObject,
)

from .utils import as_name

__all__ = [
    "ObjectKind",
    "MissingObject",
    "kind_of",
    "render",
    "reference_text",
    "caption",
    "dictionary_type",
    "dictionary_entry",
    "dictionary_entry_caption",
]


class ObjectKind(str, Enum):
    """Kinds of PDF objects, used by shells to pick an icon."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    NAME = "name"
    STRING = "string"
    ARRAY = "array"
    DICTIONARY = "dictionary"
    STREAM = "stream"
    INDIRECT_REFERENCE = "indirect"


class MissingObject:
    """Stands in for an indirect object that is not present in the store."""

    __slots__ = ("number", "generation")

    def __init__(self, number: int, generation: int = 0) -> None:
        self.number = number
        self.generation = generation

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MissingObject):
            return NotImplemented
        return (self.number, self.generation) == (other.number, other.generation)

    def __hash__(self) -> int:
        return hash((MissingObject, self.number, self.generation))

    def __repr__(self) -> str:
        return f"MissingObject({self.number!r}, {self.generation!r})"

    def __str__(self) -> str:
        return f"Missing object: {self.number} {self.generation} R"


def kind_of(obj: Any) -> ObjectKind:
    """Return the :class:`ObjectKind` of ``obj``."""

    # IndirectObject forwards attribute lookups to its target, so it is
    # identified before anything else touches it.
    if isinstance(obj, IndirectObject):
        return ObjectKind.INDIRECT_REFERENCE
    if obj is None or isinstance(obj, (NullObject, MissingObject)):
        return ObjectKind.NULL
    if isinstance(obj, (BooleanObject, bool)):
        return ObjectKind.BOOLEAN
    if isinstance(obj, NameObject):
        return ObjectKind.NAME
    if isinstance(obj, (str, bytes, bytearray)):
        return ObjectKind.STRING
    if isinstance(obj, (int, float)):
        return ObjectKind.NUMBER
    if isinstance(obj, StreamObject):
        return ObjectKind.STREAM
    if isinstance(obj, (DictionaryObject, dict)):
        return ObjectKind.DICTIONARY
    if isinstance(obj, (ArrayObject, list, tuple)):
        return ObjectKind.ARRAY
    raise TypeError(f"Unsupported PDF object type: {type(obj).__name__}")


def reference_text(ref: IndirectObject) -> str:
    return f"{ref.idnum} {ref.generation} R"


def dictionary_type(obj: Any) -> str | None:
    """Return the ``/Type`` name of a dictionary or stream, if it has one."""

    if kind_of(obj) not in (ObjectKind.DICTIONARY, ObjectKind.STREAM):
        return None
    value = obj.get("/Type")
    if isinstance(value, str):
        return as_name(value)
    return None


def dictionary_entry(dictionary: Any, key: str) -> Any:
    """Return the raw value stored under ``key``, keeping indirect references."""

    name = as_name(key)
    if isinstance(dictionary, DictionaryObject):
        if name not in dictionary:
            raise KeyError(name)
        return dictionary.raw_get(name)
    return dictionary[name]


def render(obj: Any) -> str:
    """Render ``obj`` in its natural textual form."""

    kind = kind_of(obj)
    if kind is ObjectKind.INDIRECT_REFERENCE:
        return reference_text(obj)
    if kind is ObjectKind.NULL:
        return str(obj) if isinstance(obj, MissingObject) else "null"
    if kind is ObjectKind.BOOLEAN:
        value = obj.value if isinstance(obj, BooleanObject) else obj
        return "true" if value else "false"
    if kind is ObjectKind.STRING:
        if isinstance(obj, (ByteStringObject, bytes, bytearray)):
            return f"<{bytes(obj).hex()}>"
        return str(obj)
    if kind is ObjectKind.ARRAY:
        return "[" + " ".join(render(item) for item in obj) + "]"
    if kind is ObjectKind.STREAM:
        return "Stream"
    if kind is ObjectKind.DICTIONARY:
        type_name = dictionary_type(obj)
        if type_name is None:
            return "Dictionary"
        return f"Dictionary of type: {type_name}"
    return str(obj)


def caption(obj: Any) -> str:
    """Return the caption shown for a tree node wrapping ``obj``."""

    if obj is None:
        return "null"
    kind = kind_of(obj)
    if kind is ObjectKind.INDIRECT_REFERENCE:
        return "Indirect reference: " + render(obj)
    if kind is ObjectKind.ARRAY:
        return "Array"
    if kind is ObjectKind.STREAM:
        return "Stream"
    return render(obj)


def dictionary_entry_caption(dictionary: Any, key: str) -> str:
    """Return ``"<key>: <value>"`` for an entry of ``dictionary``."""

    return f"{as_name(key)}: {render(dictionary_entry(dictionary, key))}"
