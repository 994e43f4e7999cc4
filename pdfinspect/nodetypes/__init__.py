"""Object tree nodes and the factory that expands them."""

from __future__ import annotations

from .factory import TreeNodeFactory
from .tree_node import NOT_INDIRECT, NodeVariant, ObjectTreeNode, classify

__all__ = ["NOT_INDIRECT", "NodeVariant", "ObjectTreeNode", "TreeNodeFactory", "classify"]
