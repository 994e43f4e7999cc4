"""Builds object tree nodes on demand from a populated object store."""

from __future__ import annotations

from typing import Any

from ..core.objects import MissingObject, ObjectKind
from ..core.store import ObjectStore
from ..core.utils import get_logger
from .tree_node import NodeVariant, ObjectTreeNode

__all__ = ["TreeNodeFactory"]

LOGGER = get_logger(__name__)


class TreeNodeFactory:
    """Creates and expands the nodes of the object tree of one document."""

    def __init__(self, store: ObjectStore) -> None:
        self.store = store

    def get_node(self, number: int) -> ObjectTreeNode:
        """Return a new root node for the indirect object ``number``."""

        if number in self.store:
            obj = self.store.get(number)
        else:
            obj = MissingObject(number)
        return self.create_node(obj, number)

    def create_node(self, obj: Any, number: int | None = None) -> ObjectTreeNode:
        """Return a new root node for ``obj`` that expands through this factory."""

        return self._prepare(ObjectTreeNode.get_instance(obj, number))

    def trailer_node(self) -> ObjectTreeNode:
        node = self.create_node(self.store.trailer)
        node.caption = "Trailer"
        return node

    def expand_node(self, node: ObjectTreeNode) -> None:
        """Create the children of ``node``; nodes are expanded only once."""

        if node.recursive or not node.mark_expanded():
            return
        obj = node.object
        if node.kind is ObjectKind.INDIRECT_REFERENCE:
            leaf = ObjectTreeNode.get_instance(self.store.resolve(obj), node.get_number())
            self.add_nodes(node, leaf)
            if leaf.variant is NodeVariant.PAGE_TREE:
                self.expand_node(leaf)
        elif node.kind is ObjectKind.ARRAY:
            for item in obj:
                leaf = ObjectTreeNode.get_instance(item)
                self.add_nodes(node, leaf)
                self.expand_node(leaf)
        elif node.kind in (ObjectKind.DICTIONARY, ObjectKind.STREAM):
            for key in obj.keys():
                leaf = ObjectTreeNode.from_dictionary_entry(obj, key)
                self.add_nodes(node, leaf)
                self.expand_node(leaf)

    def add_nodes(self, parent: ObjectTreeNode, child: ObjectTreeNode) -> None:
        """Attach ``child`` to ``parent``, flagging it if it closes a cycle."""

        self._prepare(child)
        if child.is_indirect_reference():
            number = child.get_number()
            for node in (parent, *parent.ancestors()):
                if node.is_indirect_reference() and node.get_number() == number:
                    child.recursive = True
                    LOGGER.debug("Reference to object %d is recursive", number)
                    break
        parent.add(child)

    def _prepare(self, node: ObjectTreeNode) -> ObjectTreeNode:
        node.set_expander(self.expand_node)
        return node
