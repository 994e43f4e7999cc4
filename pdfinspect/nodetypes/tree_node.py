"""Tree nodes wrapping the objects of a PDF document.

Every node in the object tree corresponds with one PDF object.  The object
graph of a PDF file is not a tree: indirect references may point back to an
object that is already on the path from the root.  Such a reference is kept
as a childless node flagged ``recursive`` instead of being followed.
"""

from __future__ import annotations

import weakref
from enum import Enum
from typing import Any, Callable, Iterator

from pypdf.generic import IndirectObject

from ..core.objects import ObjectKind, caption, dictionary_entry, dictionary_entry_caption, dictionary_type, kind_of
from ..core.utils import as_name

__all__ = ["NOT_INDIRECT", "NodeVariant", "ObjectTreeNode", "classify"]

#: Object number of a node that does not stand for an indirect object.
NOT_INDIRECT = -1


class NodeVariant(Enum):
    """Display specializations of a node."""

    GENERIC = "generic"
    PAGE = "page"
    PAGE_TREE = "pages"


_VARIANTS_BY_TYPE = {
    "/Page": NodeVariant.PAGE,
    "/Pages": NodeVariant.PAGE_TREE,
}


def classify(obj: Any) -> NodeVariant:
    """Return the :class:`NodeVariant` for ``obj``."""

    if kind_of(obj) is ObjectKind.DICTIONARY:
        return _VARIANTS_BY_TYPE.get(dictionary_type(obj) or "", NodeVariant.GENERIC)
    return NodeVariant.GENERIC


class ObjectTreeNode:
    """A node of the object tree.

    Attributes:
        object: the PDF object represented by this node.
        kind: the :class:`ObjectKind` of ``object``.
        variant: the :class:`NodeVariant` of ``object``.
        caption: the text shown for this node.
        key: the dictionary key this node was reached through, if any.
        recursive: ``True`` if this node is an indirect reference to an
            object that is already one of its ancestors.
    """

    def __init__(self, obj: Any, variant: NodeVariant = NodeVariant.GENERIC) -> None:
        self.object = obj
        self.kind = kind_of(obj)
        self.variant = variant
        self.caption = caption(obj)
        self.key: str | None = None
        self.number = NOT_INDIRECT
        self.recursive = False
        self._parent: weakref.ReferenceType[ObjectTreeNode] | None = None
        self._children: list[ObjectTreeNode] = []
        self._expander: Callable[[ObjectTreeNode], None] | None = None
        self._expanded = False

    # -- Construction --------------------------------------------------------

    @classmethod
    def get_instance(cls, obj: Any, number: int | None = None) -> "ObjectTreeNode":
        """Create a node for ``obj``.

        ``number`` is the object number to record when the node is the root
        of an indirect object fetched by number.
        """

        node = cls(obj, classify(obj))
        if number is not None:
            node.number = number
        return node

    @classmethod
    def from_dictionary_entry(cls, dictionary: Any, key: str) -> "ObjectTreeNode":
        """Create a node for the value stored under ``key`` in ``dictionary``."""

        node = cls.get_instance(dictionary_entry(dictionary, key))
        node.caption = dictionary_entry_caption(dictionary, key)
        node.key = as_name(key)
        return node

    # -- Tree structure ------------------------------------------------------

    @property
    def parent(self) -> "ObjectTreeNode | None":
        if self._parent is None:
            return None
        return self._parent()

    @property
    def children(self) -> tuple["ObjectTreeNode", ...]:
        """Child nodes, materialized on first access."""

        self.expand()
        return tuple(self._children)

    @property
    def is_expanded(self) -> bool:
        return self._expanded

    def add(self, child: "ObjectTreeNode") -> None:
        child._parent = weakref.ref(self)
        self._children.append(child)

    def set_expander(self, expander: Callable[["ObjectTreeNode"], None]) -> None:
        self._expander = expander

    def mark_expanded(self) -> bool:
        """Flag the node as expanded; return ``False`` if it already was."""

        if self._expanded:
            return False
        self._expanded = True
        return True

    def expand(self) -> None:
        if self._expanded or self._expander is None or self.recursive:
            return
        self._expander(self)

    def ancestors(self) -> Iterator["ObjectTreeNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def path(self) -> list["ObjectTreeNode"]:
        """Return the nodes from the root down to this node."""

        nodes = [self, *self.ancestors()]
        nodes.reverse()
        return nodes

    # -- Object information --------------------------------------------------

    def is_dictionary_node(self, key: str | None) -> bool:
        """Check if this node is the dictionary entry for ``key``."""

        if key is None or self.key is None:
            return False
        return self.key == as_name(key)

    def is_indirect_reference(self) -> bool:
        return self.kind is ObjectKind.INDIRECT_REFERENCE

    def is_indirect(self) -> bool:
        """``True`` for indirect references and for indirect objects."""

        return self.is_indirect_reference() or self.number > NOT_INDIRECT

    def get_number(self) -> int:
        """Return the object number, or ``NOT_INDIRECT`` for direct objects."""

        if isinstance(self.object, IndirectObject):
            return self.object.idnum
        return self.number

    def get_ancestor(self) -> "ObjectTreeNode | None":
        """Return the ancestor a recursive reference points back to.

        Returns ``None`` for nodes that are not recursive.
        """

        if not self.recursive:
            return None
        number = self.get_number()
        for node in self.ancestors():
            if node.is_indirect_reference() and node.get_number() == number:
                return node
        raise LookupError(f"Recursive reference to object {number} has no matching ancestor")

    def __str__(self) -> str:
        return self.caption

    def __repr__(self) -> str:
        return f"ObjectTreeNode({self.caption!r}, kind={self.kind.value}, variant={self.variant.value})"
