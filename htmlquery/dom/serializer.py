"""
HTML serialization of document trees.

The tree is exposed to html5lib as a tree walker, so markup is produced
by html5lib's own serializer with its escaping and void element rules.
"""

from typing import NamedTuple

from html5lib.serializer import HTMLSerializer
from html5lib.treewalkers.base import (COMMENT, DOCTYPE, DOCUMENT, ELEMENT,
                                       TEXT, NonRecursiveTreeWalker)

from .node import Node, NodeType


class _AttributeText(NamedTuple):
    """Text child of an element that stands for an attribute."""
    owner: Node


class TreeWalker(NonRecursiveTreeWalker):
    """html5lib tree walker over :class:`Node` trees."""

    def getNodeDetails(self, node):
        if isinstance(node, _AttributeText):
            return TEXT, node.owner.inner_text

        node_type = node.node_type
        if node_type == NodeType.DOCUMENT_NODE:
            return (DOCUMENT,)
        if node_type == NodeType.DOCUMENT_TYPE_NODE:
            return DOCTYPE, node.data, node.public_id or None, node.system_id or None
        if node_type == NodeType.TEXT_NODE:
            return TEXT, node.data
        if node_type == NodeType.COMMENT_NODE:
            return COMMENT, node.data

        attrs = {(None, attr.name): attr.value for attr in node.attributes}
        has_children = node.first_child is not None or getattr(node, 'is_attribute', False)
        return ELEMENT, node.namespace_uri, node.data, attrs, has_children

    def getFirstChild(self, node):
        if getattr(node, 'is_attribute', False):
            return _AttributeText(node)
        return node.first_child

    def getNextSibling(self, node):
        if isinstance(node, _AttributeText):
            return None
        return node.next_sibling

    def getParentNode(self, node):
        if isinstance(node, _AttributeText):
            return node.owner
        return node.parent_node


def render(node: Node, include_self: bool = True) -> str:
    """
    Serialize a node to HTML.

    Args:
        node: The node to serialize
        include_self: Whether to include the node itself or only its children

    Returns:
        The markup as a string
    """
    serializer = HTMLSerializer(omit_optional_tags=False, quote_attr_values="always")
    if include_self:
        return serializer.render(TreeWalker(node))
    return "".join(serializer.render(TreeWalker(child)) for child in node.child_nodes)
