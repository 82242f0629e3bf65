"""
Node implementation for the document tree.
This module implements the base node with its tree links, attribute lookup,
text extraction and the query entry points.
"""

import re
from enum import IntEnum
from typing import List, Optional, TYPE_CHECKING

from ..exceptions import NoSuchAttributeError, NotAnElementError
from .attr import Attr

if TYPE_CHECKING:
    from .element import Element
    from .navigator import NodeNavigator


class NodeType(IntEnum):
    """Node types, numbered as in the DOM specification."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10


class Node:
    """
    Base node of a parsed document tree.

    ``data`` holds the tag name for elements, the character data for text
    and comment nodes, and the declared name for a doctype. The tree is
    built once by the parser through :meth:`append_child` and is treated
    as read-only afterwards.
    """

    def __init__(self, node_type: NodeType, data: str = ""):
        """
        Initialize a new Node.

        Args:
            node_type: The type of this node
            data: Tag name or character data, depending on the type
        """
        self.node_type = node_type
        self.data = data
        self.attributes: List[Attr] = []

        # Node relationships
        self.parent_node: Optional['Node'] = None
        self.child_nodes: List['Node'] = []
        self.first_child: Optional['Node'] = None
        self.last_child: Optional['Node'] = None
        self.previous_sibling: Optional['Node'] = None
        self.next_sibling: Optional['Node'] = None

    @property
    def children(self) -> List['Element']:
        """Get a list of child elements."""
        return [child for child in self.child_nodes if child.node_type == NodeType.ELEMENT_NODE]

    def append_child(self, child: 'Node') -> 'Node':
        """
        Append a child node to this node.

        Args:
            child: A node that has no parent yet

        Returns:
            The appended node
        """
        if child.parent_node is not None:
            raise ValueError("node already has a parent")

        child.parent_node = self
        if self.last_child is not None:
            self.last_child.next_sibling = child
            child.previous_sibling = self.last_child
        else:
            self.first_child = child
        self.last_child = child
        self.child_nodes.append(child)
        return child

    # Attributes

    def attribute(self, key: str) -> Optional[Attr]:
        """Get the first attribute named ``key``, in declaration order."""
        for attr in self.attributes:
            if attr.key == key:
                return attr
        return None

    def attribute_by_value(self, value: str) -> Optional[Attr]:
        """Get the first attribute whose value is ``value``."""
        for attr in self.attributes:
            if attr.value == value:
                return attr
        return None

    def attribute_by_namespace(self, namespace: str) -> Optional[Attr]:
        """Get the first attribute in the given namespace."""
        for attr in self.attributes:
            if attr.namespace == namespace:
                return attr
        return None

    def attribute_value(self, key: str) -> str:
        """
        Get the value of an attribute.

        A parentless element named ``key`` is an attribute returned by a
        query, in which case its text is the attribute value. This lets
        ``node.attribute_value("href")`` work both on an ``<a>`` element
        and on the result of ``//a/@href``.

        Args:
            key: The attribute name

        Returns:
            The attribute value

        Raises:
            NoSuchAttributeError: If the node has no such attribute
        """
        if self.node_type == NodeType.ELEMENT_NODE and self.parent_node is None and self.data == key:
            return self.inner_text
        attr = self.attribute(key)
        if attr is None:
            raise NoSuchAttributeError(key)
        return attr.value

    def select_attr(self, key: str) -> str:
        """Get the value of an attribute, or an empty string if there is none."""
        try:
            return self.attribute_value(key)
        except NoSuchAttributeError:
            return ""

    def has_attribute(self, key: str) -> bool:
        try:
            self.attribute_value(key)
        except NoSuchAttributeError:
            return False
        return True

    @property
    def tag_name(self) -> str:
        """
        Get the tag name of an element.

        Raises:
            NotAnElementError: If the node is not an element
        """
        if self.node_type != NodeType.ELEMENT_NODE:
            raise NotAnElementError(f"{self.node_type.name} has no tag name")
        return self.data

    # Text and markup

    @property
    def inner_text(self) -> str:
        """
        Get the text of this node and all its descendants.

        Text nodes are concatenated in document order; comments never
        contribute, nor does anything below them.
        """
        if self.node_type == NodeType.TEXT_NODE:
            return self.data

        parts = []
        stack = list(reversed(self.child_nodes))
        while stack:
            node = stack.pop()
            if node.node_type == NodeType.TEXT_NODE:
                parts.append(node.data)
            elif node.node_type != NodeType.COMMENT_NODE:
                stack.extend(reversed(node.child_nodes))
        return "".join(parts)

    @property
    def text(self) -> str:
        """Alias for :attr:`inner_text`."""
        return self.inner_text

    def output_html(self, include_self: bool = True) -> str:
        """
        Serialize the node to HTML.

        Args:
            include_self: Whether to include the node itself or only its children

        Returns:
            The serialized markup
        """
        from .serializer import render
        return render(self, include_self)

    @property
    def outer_html(self) -> str:
        return self.output_html(True)

    @property
    def inner_html(self) -> str:
        return self.output_html(False)

    def regexp(self, pattern: str) -> List[str]:
        """Find all matches of a regular expression in the node data."""
        return [match.group(0) for match in re.finditer(pattern, self.data)]

    def regexp_groups(self, pattern: str) -> List[List[str]]:
        """
        Find all matches of a regular expression in the node data.

        Returns:
            For each match, the full match followed by its groups; groups
            that did not participate are empty strings
        """
        return [[match.group(0)] + list(match.groups(default=""))
                for match in re.finditer(pattern, self.data)]

    # Queries

    def create_navigator(self) -> 'NodeNavigator':
        """Create an XPath navigator rooted at this node."""
        from .navigator import NodeNavigator
        return NodeNavigator(self)

    def query_all(self, expression) -> List['Node']:
        """
        Find all nodes matching an XPath expression.

        Args:
            expression: Expression text or a compiled expression

        Raises:
            QueryError: If the expression cannot be compiled or evaluated
        """
        from ..query.executor import get_default_executor
        return get_default_executor().query_all(self, expression)

    def query(self, expression) -> Optional['Node']:
        """
        Find the first node matching an XPath expression.

        Raises:
            QueryError: If the expression cannot be compiled or evaluated
        """
        from ..query.executor import get_default_executor
        return get_default_executor().query(self, expression)

    def find(self, expression) -> List['Node']:
        """
        Like :meth:`query_all`, for expressions known to be valid.

        Raises:
            FatalQueryError: If the expression fails
        """
        from ..query.executor import get_default_executor
        return get_default_executor().find(self, expression)

    def find_one(self, expression) -> Optional['Node']:
        """
        Like :meth:`query`, for expressions known to be valid.

        Raises:
            FatalQueryError: If the expression fails
        """
        from ..query.executor import get_default_executor
        return get_default_executor().find_one(self, expression)

    def query_selector_all(self, selector: str) -> List['Node']:
        """Find all elements matching a CSS selector."""
        from ..query.executor import get_default_executor
        return get_default_executor().query_selector_all(self, selector)

    def query_selector(self, selector: str) -> Optional['Node']:
        """Find the first element matching a CSS selector."""
        from ..query.executor import get_default_executor
        return get_default_executor().query_selector(self, selector)

    def __str__(self):
        return self.output_html(True)

    def __repr__(self):
        return f"<{type(self).__name__} {self.data!r}>"
