"""
Document tree for htmlquery.
This package provides the read-only node model that queries run against
and the navigator that exposes it to the XPath engine.
"""

from .node import Node, NodeType
from .element import Element
from .attr import Attr
from .text import Text
from .comment import Comment
from .document import Document, DocumentType
from .navigator import NodeNavigator
from .serializer import render

__all__ = [
    'Node', 'NodeType', 'Element', 'Attr', 'Text', 'Comment', 'Document',
    'DocumentType', 'NodeNavigator', 'render'
]
