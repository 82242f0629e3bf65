"""
Comment node implementation for the document tree.
"""

from .node import Node, NodeType


class Comment(Node):
    """
    A comment node.

    Comments are kept in the tree so they can be queried with
    ``comment()`` and serialized, but never count towards inner text.
    """

    def __init__(self, data: str):
        super().__init__(NodeType.COMMENT_NODE, data or "")
