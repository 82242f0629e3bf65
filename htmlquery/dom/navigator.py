"""
XPath navigator over the document tree.

A navigator is a position, not a node: it points either at a node or at
one attribute of a node. The XPath engine walks the tree only through
this cursor, so this is the whole contract between the two.
"""

from typing import Optional, Tuple

from ..xpath import NodeKind, XPathNavigator
from .attr import Attr
from .node import Node, NodeType

_NODE_KINDS = {
    NodeType.DOCUMENT_NODE: NodeKind.ROOT,
    NodeType.ELEMENT_NODE: NodeKind.ELEMENT,
    NodeType.TEXT_NODE: NodeKind.TEXT,
    NodeType.COMMENT_NODE: NodeKind.COMMENT,
    NodeType.DOCUMENT_TYPE_NODE: NodeKind.OTHER,
}


class NodeNavigator(XPathNavigator):
    """
    Cursor over a :class:`Node` tree.

    Attributes:
        root: The node the navigator was created for
        current: The node at the current position
        attribute_index: -1 when positioned on ``current`` itself, otherwise
            the index of the attribute of ``current`` the cursor is on
    """

    __slots__ = ('root', 'current', 'attribute_index')

    def __init__(self, root: Node, current: Optional[Node] = None, attribute_index: int = -1):
        self.root = root
        self.current = current if current is not None else root
        self.attribute_index = attribute_index

    @property
    def current_attribute(self) -> Optional[Attr]:
        """The attribute the cursor is on, or None when it is on a node."""
        if self.attribute_index < 0:
            return None
        return self.current.attributes[self.attribute_index]

    @property
    def node_type(self) -> NodeKind:
        if self.attribute_index >= 0:
            return NodeKind.ATTRIBUTE
        return _NODE_KINDS[self.current.node_type]

    @property
    def local_name(self) -> str:
        if self.attribute_index >= 0:
            return self.current_attribute.key
        if self.current.node_type == NodeType.ELEMENT_NODE:
            return self.current.data
        return ""

    @property
    def prefix(self) -> str:
        if self.attribute_index >= 0:
            return self.current_attribute.namespace or ""
        return ""

    @property
    def value(self) -> str:
        if self.attribute_index >= 0:
            return self.current_attribute.value
        if self.current.node_type in (NodeType.TEXT_NODE, NodeType.COMMENT_NODE):
            return self.current.data
        return self.current.inner_text

    @property
    def node_key(self) -> Tuple[Node, int]:
        return self.current, self.attribute_index

    def copy(self) -> 'NodeNavigator':
        return NodeNavigator(self.root, self.current, self.attribute_index)

    def move_to_root(self) -> bool:
        self.current = self.root
        self.attribute_index = -1
        return True

    def move_to_parent(self) -> bool:
        if self.attribute_index >= 0:
            # leaving an attribute lands on its owner
            self.attribute_index = -1
            return True
        parent = self.current.parent_node
        if parent is None:
            return False
        self.current = parent
        return True

    def move_to_child(self) -> bool:
        if self.attribute_index >= 0:
            return False
        child = self.current.first_child
        if child is None:
            return False
        self.current = child
        return True

    def move_to_first(self) -> bool:
        if self.attribute_index >= 0 or self.current.previous_sibling is None:
            return False
        node = self.current
        while node.previous_sibling is not None:
            node = node.previous_sibling
        self.current = node
        return True

    def move_to_next(self) -> bool:
        if self.attribute_index >= 0:
            return False
        sibling = self.current.next_sibling
        if sibling is None:
            return False
        self.current = sibling
        return True

    def move_to_previous(self) -> bool:
        if self.attribute_index >= 0:
            return False
        sibling = self.current.previous_sibling
        if sibling is None:
            return False
        self.current = sibling
        return True

    def move_to_next_attribute(self) -> bool:
        if self.attribute_index + 1 >= len(self.current.attributes):
            return False
        self.attribute_index += 1
        return True

    def is_same_node(self, other: XPathNavigator) -> bool:
        return (isinstance(other, NodeNavigator)
                and self.current is other.current
                and self.attribute_index == other.attribute_index)

    def __repr__(self):
        if self.attribute_index >= 0:
            return f"<NodeNavigator {self.current!r} @{self.current_attribute.name}>"
        return f"<NodeNavigator {self.current!r}>"
