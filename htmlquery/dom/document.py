"""
Document and doctype nodes.
"""

from typing import Optional

from .element import Element
from .node import Node, NodeType


class DocumentType(Node):
    """
    A ``<!DOCTYPE>`` declaration.

    ``data`` is the declared name, usually ``html``.
    """

    def __init__(self, name: str, public_id: str = "", system_id: str = ""):
        super().__init__(NodeType.DOCUMENT_TYPE_NODE, name)
        self.public_id = public_id
        self.system_id = system_id

    @property
    def name(self) -> str:
        return self.data


class Document(Node):
    """
    The root of a parsed document.

    Attributes:
        url: Where the document was loaded from, if known
    """

    def __init__(self, url: Optional[str] = None):
        super().__init__(NodeType.DOCUMENT_NODE)
        self.url = url

    @property
    def doctype(self) -> Optional[DocumentType]:
        """The doctype declaration, if the document has one."""
        for child in self.child_nodes:
            if child.node_type == NodeType.DOCUMENT_TYPE_NODE:
                return child
        return None

    @property
    def document_element(self) -> Optional[Element]:
        """The top-level element, normally ``<html>``."""
        for child in self.child_nodes:
            if child.node_type == NodeType.ELEMENT_NODE:
                return child
        return None

    @property
    def title(self) -> str:
        """Text of the first ``<title>`` element, or an empty string."""
        element = self.find_one("//title")
        return element.inner_text.strip() if element is not None else ""

    def __repr__(self):
        return f"<Document url={self.url!r}>"
