"""
Text node implementation for the document tree.
"""

from .node import Node, NodeType


class Text(Node):
    """A run of character data."""

    def __init__(self, data: str):
        super().__init__(NodeType.TEXT_NODE, data or "")

    @property
    def is_whitespace(self) -> bool:
        """Whether the text consists of whitespace only, such as indentation."""
        return not self.data.strip()
