"""
Axis iterators.

Each axis function takes a navigator and yields independent copies
positioned on the nodes of the axis, in axis order: document order for
forward axes, reverse document order for reverse axes.
"""

from typing import Callable, Dict, Iterator

from .navigator import NodeKind, XPathNavigator

AxisFunction = Callable[[XPathNavigator], Iterator[XPathNavigator]]

REVERSE_AXES = frozenset([
    'ancestor', 'ancestor-or-self', 'preceding', 'preceding-sibling',
])


def descendants(navigator: XPathNavigator) -> Iterator[XPathNavigator]:
    node = navigator.copy()
    if not node.move_to_child():
        return
    depth = 1
    while True:
        yield node.copy()
        if node.move_to_child():
            depth += 1
            continue
        while not node.move_to_next():
            node.move_to_parent()
            depth -= 1
            if depth == 0:
                return


def child_axis(navigator):
    node = navigator.copy()
    if not node.move_to_child():
        return
    yield node.copy()
    while node.move_to_next():
        yield node.copy()


def descendant_axis(navigator):
    return descendants(navigator)


def descendant_or_self_axis(navigator):
    yield navigator.copy()
    yield from descendants(navigator)


def self_axis(navigator):
    yield navigator.copy()


def parent_axis(navigator):
    node = navigator.copy()
    if node.move_to_parent():
        yield node


def ancestor_axis(navigator):
    node = navigator.copy()
    while node.move_to_parent():
        yield node.copy()


def ancestor_or_self_axis(navigator):
    yield navigator.copy()
    yield from ancestor_axis(navigator)


def attribute_axis(navigator):
    node = navigator.copy()
    while node.move_to_next_attribute():
        yield node.copy()


def following_sibling_axis(navigator):
    node = navigator.copy()
    while node.move_to_next():
        yield node.copy()


def preceding_sibling_axis(navigator):
    node = navigator.copy()
    while node.move_to_previous():
        yield node.copy()


def following_axis(navigator):
    node = navigator.copy()
    if node.node_type == NodeKind.ATTRIBUTE:
        # the owner's subtree follows its attributes
        node.move_to_parent()
        yield from descendants(node)
    while True:
        while not node.move_to_next():
            if not node.move_to_parent():
                return
        yield node.copy()
        yield from descendants(node)


def preceding_axis(navigator):
    node = navigator.copy()
    if node.node_type == NodeKind.ATTRIBUTE:
        node.move_to_parent()
    while True:
        sibling = node.copy()
        while sibling.move_to_previous():
            subtree = [sibling.copy()]
            subtree.extend(descendants(sibling))
            yield from reversed(subtree)
        if not node.move_to_parent():
            return


def namespace_axis(navigator):
    # HTML trees carry no namespace nodes
    return iter(())


AXES: Dict[str, AxisFunction] = {
    'ancestor': ancestor_axis,
    'ancestor-or-self': ancestor_or_self_axis,
    'attribute': attribute_axis,
    'child': child_axis,
    'descendant': descendant_axis,
    'descendant-or-self': descendant_or_self_axis,
    'following': following_axis,
    'following-sibling': following_sibling_axis,
    'namespace': namespace_axis,
    'parent': parent_axis,
    'preceding': preceding_axis,
    'preceding-sibling': preceding_sibling_axis,
    'self': self_axis,
}
