"""
Element implementation for the document tree.
"""

from typing import Optional

from .attr import Attr
from .node import Node, NodeType

HTML_NAMESPACE = "http://www.w3.org/1999/xhtml"


class Element(Node):
    """
    An element node.

    Elements created with :meth:`from_attribute` stand for an attribute
    selected by a query: they have no parent and no children, their tag
    name is the attribute key and their text is the attribute value.
    """

    def __init__(self, tag_name: str, namespace_uri: Optional[str] = HTML_NAMESPACE):
        """
        Initialize a new Element.

        Args:
            tag_name: Name of the element tag (e.g., "div", "span")
            namespace_uri: Namespace of the element, HTML unless foreign content
        """
        super().__init__(NodeType.ELEMENT_NODE, tag_name)
        self.namespace_uri = namespace_uri
        self._attribute_value: Optional[str] = None

    @classmethod
    def from_attribute(cls, attr: Attr) -> 'Element':
        """Create a detached element standing for an attribute."""
        element = cls(attr.key)
        element._attribute_value = attr.value
        return element

    @property
    def is_attribute(self) -> bool:
        """Whether the element was created from an attribute."""
        return self._attribute_value is not None

    def set_attribute(self, key: str, value: str, namespace: Optional[str] = None) -> Attr:
        """Add an attribute; used while building the tree."""
        attr = Attr(key, value, namespace, self)
        self.attributes.append(attr)
        return attr

    @property
    def inner_text(self) -> str:
        if self._attribute_value is not None:
            return self._attribute_value
        return super().inner_text
