"""
XPath value model.

An XPath value is one of four types, represented as:

- node-set: a ``list`` of navigators in document order, without duplicates
- string: ``str``
- number: ``float``
- boolean: ``bool``

This module holds the conversion rules between them and the document
order used to normalize node-sets.
"""

import decimal
import math
import re
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple

from .navigator import NodeKind, XPathNavigator

_NUMBER_RE = re.compile(r'^\s*-?(\d+(\.\d*)?|\.\d+)\s*$')


def is_node_set(value: Any) -> bool:
    return isinstance(value, list)


def number_to_string(number: float) -> str:
    """Format a number the way XPath's string() does."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == int(number):
        return str(int(number))
    text = repr(number)
    if 'e' in text or 'E' in text:
        text = format(decimal.Decimal(text), 'f')
    return text


def string_to_number(text: str) -> float:
    if _NUMBER_RE.match(text):
        return float(text)
    return math.nan


def string_value(value: Any) -> str:
    if isinstance(value, list):
        return value[0].value if value else ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return number_to_string(value)
    if isinstance(value, int):
        return str(value)
    return value


def number_value(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return string_to_number(string_value(value))


def boolean_value(value: Any) -> bool:
    if isinstance(value, list):
        return len(value) > 0
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not (value == 0 or math.isnan(value))
    return len(value) > 0


class DocumentOrder:
    """
    Sort keys reflecting the document position of navigators.

    A key is the list of sibling indexes from the top of the tree down to
    the node. Attributes sort after their owner and before its children,
    so they get ``-1`` and their attribute index appended to the owner key.

    Keys and sibling indexes are remembered, so one instance should live
    for one evaluation: computing the key of a node then costs a walk to
    the nearest sibling or ancestor already seen.
    """

    def __init__(self):
        self._keys: Dict[Hashable, Tuple[int, ...]] = {}
        self._indexes: Dict[Hashable, int] = {}

    def key(self, navigator: XPathNavigator) -> Tuple[int, ...]:
        known = self._keys.get(navigator.node_key)
        if known is not None:
            return known

        # climb to the nearest ancestor with a known key
        chain = []
        node = navigator.copy()
        key: Tuple[int, ...] = ()
        while True:
            identity = node.node_key
            known = self._keys.get(identity)
            if known is not None:
                key = known
                break
            if node.node_type == NodeKind.ATTRIBUTE:
                chain.append((identity, (-1, self._attribute_index(node))))
            else:
                chain.append((identity, (self._sibling_index(node),)))
            if not node.move_to_parent():
                break

        for identity, step in reversed(chain):
            key = key + step
            self._keys[identity] = key
        return key

    def _sibling_index(self, navigator: XPathNavigator) -> int:
        identity = navigator.node_key
        index = self._indexes.get(identity)
        if index is not None:
            return index

        # walk back to a sibling with a known index, numbering the ones passed
        walked = []
        base = -1
        sibling = navigator.copy()
        while sibling.move_to_previous():
            known = self._indexes.get(sibling.node_key)
            if known is not None:
                base = known
                break
            walked.append(sibling.node_key)
        for distance, passed in enumerate(reversed(walked), 1):
            self._indexes[passed] = base + distance
        index = base + len(walked) + 1
        self._indexes[identity] = index
        return index

    @staticmethod
    def _attribute_index(navigator: XPathNavigator) -> int:
        owner = navigator.copy()
        owner.move_to_parent()
        index = 0
        while owner.move_to_next_attribute():
            if owner.is_same_node(navigator):
                break
            index += 1
        return index


def document_order(nodes: Iterable[XPathNavigator],
                   order: Optional[DocumentOrder] = None) -> List[XPathNavigator]:
    """Sort navigators into document order and drop duplicate positions."""
    nodes = list(nodes)
    if len(nodes) < 2:
        return nodes
    if order is None:
        order = DocumentOrder()
    unique = {}
    for node in nodes:
        unique.setdefault(order.key(node), node)
    return [unique[key] for key in sorted(unique)]
