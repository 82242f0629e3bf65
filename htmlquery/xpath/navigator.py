"""
Navigator protocol used by the XPath engine.
This module defines the cursor interface a tree must implement to be queried.
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Hashable


class NodeKind(IntEnum):
    """Node kinds as seen by the XPath data model."""
    ROOT = 0
    ELEMENT = 1
    ATTRIBUTE = 2
    TEXT = 3
    COMMENT = 4
    OTHER = 5  # declarations such as a doctype; only node() matches them


class XPathNavigator(ABC):
    """
    A movable position inside a tree.

    The engine never touches tree nodes directly. It walks the tree by
    moving navigators and forks a position with ``copy()`` whenever it
    needs to explore more than one branch. Every ``move_*`` method returns
    True on success and False, without moving, at a boundary.
    """

    @property
    @abstractmethod
    def node_type(self) -> NodeKind:
        """Kind of the node at the current position."""

    @property
    @abstractmethod
    def local_name(self) -> str:
        """Local name of the current element or attribute, otherwise ''."""

    @property
    def prefix(self) -> str:
        """Namespace prefix of the current node, '' when it has none."""
        return ""

    @property
    @abstractmethod
    def value(self) -> str:
        """String value of the current node."""

    @property
    @abstractmethod
    def node_key(self) -> Hashable:
        """Hashable identity of the current position, equal for navigators at the same position."""

    @abstractmethod
    def copy(self) -> 'XPathNavigator':
        """Return an independent navigator at the same position."""

    @abstractmethod
    def move_to_root(self) -> bool:
        """Move to the node the navigator was created for."""

    @abstractmethod
    def move_to_parent(self) -> bool:
        """Move to the parent node, or from an attribute to its owner."""

    @abstractmethod
    def move_to_child(self) -> bool:
        """Move to the first child node."""

    @abstractmethod
    def move_to_first(self) -> bool:
        """Move to the first node of the current sibling chain."""

    @abstractmethod
    def move_to_next(self) -> bool:
        """Move to the next sibling."""

    @abstractmethod
    def move_to_previous(self) -> bool:
        """Move to the previous sibling."""

    @abstractmethod
    def move_to_next_attribute(self) -> bool:
        """Move to the first attribute, or from an attribute to the next one."""

    @abstractmethod
    def is_same_node(self, other: 'XPathNavigator') -> bool:
        """Check whether both navigators are at the same position."""
