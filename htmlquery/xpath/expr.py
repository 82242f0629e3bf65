"""
Expression tree for compiled XPath expressions.

Each node of the tree evaluates itself against a :class:`Context`. Nodes
hold no evaluation state, so a compiled tree can be shared between
threads and reused for any number of evaluations.

Location paths are evaluated lazily: :meth:`Expr.iterate` yields the
selected nodes in document order as they are found, so a caller that
only wants the first node stops the walk there.
"""

import heapq
import itertools
import math
import operator
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from .axes import AXES, REVERSE_AXES
from .errors import XPathEvaluationError, XPathTypeError
from .functions import lookup
from .navigator import NodeKind, XPathNavigator
from .values import (DocumentOrder, boolean_value, document_order, is_node_set,
                     number_value, string_value)

# axes whose nodes come before the context node in document order
_BACKWARD_AXES = REVERSE_AXES | {'parent'}


class Context:
    """
    Evaluation context: the context node, its position and the context size.

    The variable bindings and the document order cache are shared by every
    context derived from the same evaluation.
    """

    __slots__ = ('node', 'position', 'size', 'variables', 'order')

    def __init__(self, node: XPathNavigator, position: int = 1, size: int = 1,
                 variables: Optional[Dict[str, Any]] = None,
                 order: Optional[DocumentOrder] = None):
        self.node = node
        self.position = position
        self.size = size
        self.variables = variables if variables is not None else {}
        self.order = order if order is not None else DocumentOrder()

    def derive(self, node: XPathNavigator, position: int, size: int) -> 'Context':
        return Context(node, position, size, self.variables, self.order)


class Expr:
    """Base class for expression tree nodes."""

    def evaluate(self, context: Context) -> Any:
        raise NotImplementedError

    def iterate(self, context: Context) -> Iterator[XPathNavigator]:
        """
        Iterate over the nodes of a node-set result, in document order.

        Raises:
            XPathTypeError: If the expression does not produce a node-set
        """
        value = self.evaluate(context)
        if not is_node_set(value):
            raise XPathTypeError("value is not a node-set")
        return iter(value)


# Node tests

class NameTest:
    """Matches nodes of the axis' principal kind by name; ``*`` matches any name."""

    def __init__(self, principal: NodeKind, prefix: Optional[str], name: Optional[str]):
        self.principal = principal
        self.prefix = prefix
        self.name = name

    def matches(self, node: XPathNavigator) -> bool:
        if node.node_type != self.principal:
            return False
        if self.prefix is not None and node.prefix != self.prefix:
            return False
        return self.name is None or node.local_name == self.name

    def __repr__(self):
        name = self.name or '*'
        return f"{self.prefix}:{name}" if self.prefix else name


class KindTest:
    """Matches nodes by kind: node(), text(), comment() or processing-instruction()."""

    _KINDS = {
        'text': (NodeKind.TEXT,),
        'comment': (NodeKind.COMMENT,),
        'processing-instruction': (),
    }

    def __init__(self, kind: str):
        self.kind = kind

    def matches(self, node: XPathNavigator) -> bool:
        if self.kind == 'node':
            return True
        return node.node_type in self._KINDS[self.kind]

    def __repr__(self):
        return f"{self.kind}()"


def filter_by_predicate(nodes: List[XPathNavigator], predicate: Expr,
                        context: Context) -> List[XPathNavigator]:
    """Keep the nodes for which the predicate holds, positions counted in list order."""
    size = len(nodes)
    kept = []
    for position, node in enumerate(nodes, 1):
        value = predicate.evaluate(context.derive(node, position, size))
        if isinstance(value, float):
            matched = value == position
        else:
            matched = boolean_value(value)
        if matched:
            kept.append(node)
    return kept


# Location paths

def unique_positions(nodes: Iterable[XPathNavigator],
                     order: DocumentOrder) -> Iterator[XPathNavigator]:
    """Drop repeated positions from a stream that is already in document order."""
    last = None
    for node in nodes:
        key = order.key(node)
        if key != last:
            last = key
            yield node


class Step:
    """One location step: an axis, a node test and zero or more predicates."""

    def __init__(self, axis: str, node_test, predicates: Sequence[Expr] = ()):
        self.axis = axis
        self.node_test = node_test
        self.predicates = list(predicates)
        self._axis_function = AXES[axis]

    def _candidates(self, node: XPathNavigator, context: Context) -> Iterator[XPathNavigator]:
        candidates = (candidate for candidate in self._axis_function(node)
                      if self.node_test.matches(candidate))
        if not self.predicates:
            return candidates
        # predicates need the context size, so the axis is walked in full
        selected = list(candidates)
        for predicate in self.predicates:
            if not selected:
                break
            selected = filter_by_predicate(selected, predicate, context)
        return iter(selected)

    def iterate(self, nodes: Iterable[XPathNavigator],
                context: Context) -> Iterator[XPathNavigator]:
        """
        Apply the step to context nodes given in document order.

        Returns:
            The selected nodes in document order, without duplicates
        """
        if self.axis in _BACKWARD_AXES:
            selected = []
            for node in nodes:
                selected.extend(self._candidates(node, context))
            return iter(document_order(selected, context.order))
        return unique_positions(self._merge_forward(nodes, context), context.order)

    def _merge_forward(self, nodes: Iterable[XPathNavigator],
                       context: Context) -> Iterator[XPathNavigator]:
        # Every node a forward axis selects comes at or after its context
        # node, so a candidate that precedes the next context node can be
        # emitted before that context node is expanded.
        order = context.order
        pending = []
        tiebreak = itertools.count()

        def push(candidates):
            for candidate in candidates:
                heapq.heappush(pending, (order.key(candidate), next(tiebreak), candidate, candidates))
                return

        for node in nodes:
            threshold = order.key(node)
            while pending and pending[0][0] < threshold:
                _, _, candidate, candidates = heapq.heappop(pending)
                yield candidate
                push(candidates)
            push(self._candidates(node, context))

        while pending:
            _, _, candidate, candidates = heapq.heappop(pending)
            yield candidate
            push(candidates)

    def __repr__(self):
        predicates = "".join(f"[{predicate!r}]" for predicate in self.predicates)
        return f"{self.axis}::{self.node_test!r}{predicates}"


def descendant_or_self_step() -> Step:
    return Step('descendant-or-self', KindTest('node'))


def _collapse_steps(steps: List[Step]) -> List[Step]:
    # descendant-or-self::node()/child::x is descendant::x when x has no predicates
    collapsed: List[Step] = []
    for step in steps:
        if (collapsed and step.axis == 'child' and not step.predicates
                and collapsed[-1].axis == 'descendant-or-self'
                and isinstance(collapsed[-1].node_test, KindTest)
                and collapsed[-1].node_test.kind == 'node'
                and not collapsed[-1].predicates):
            collapsed[-1] = Step('descendant', step.node_test)
        else:
            collapsed.append(step)
    return collapsed


def _apply_steps(nodes: Iterator[XPathNavigator], steps: List[Step],
                 context: Context) -> Iterator[XPathNavigator]:
    for step in steps:
        nodes = step.iterate(nodes, context)
    return nodes


class LocationPath(Expr):

    def __init__(self, steps: List[Step], absolute: bool = False):
        self.steps = _collapse_steps(steps)
        self.absolute = absolute

    def iterate(self, context):
        start = context.node.copy()
        if self.absolute:
            start.move_to_root()
        return _apply_steps(iter([start]), self.steps, context)

    def evaluate(self, context):
        return list(self.iterate(context))

    def __repr__(self):
        path = "/".join(repr(step) for step in self.steps)
        return f"/{path}" if self.absolute else path


class PathExpr(Expr):
    """A filter expression followed by location steps, e.g. ``(//a)[1]/@href``."""

    def __init__(self, filter_expr: Expr, steps: List[Step]):
        self.filter_expr = filter_expr
        self.steps = _collapse_steps(steps)

    def iterate(self, context):
        return _apply_steps(self.filter_expr.iterate(context), self.steps, context)

    def evaluate(self, context):
        return list(self.iterate(context))


class FilterExpr(Expr):

    def __init__(self, primary: Expr, predicates: List[Expr]):
        self.primary = primary
        self.predicates = predicates

    def evaluate(self, context):
        nodes = list(self.primary.iterate(context))
        for predicate in self.predicates:
            nodes = filter_by_predicate(nodes, predicate, context)
        return nodes


class UnionExpr(Expr):

    def __init__(self, left: Expr, right: Expr):
        self.left = left
        self.right = right

    def iterate(self, context):
        order = context.order
        merged = heapq.merge(self.left.iterate(context), self.right.iterate(context),
                             key=order.key)
        return unique_positions(merged, order)

    def evaluate(self, context):
        return list(self.iterate(context))


# Primary expressions

class Literal(Expr):

    def __init__(self, value: str):
        self.value = value

    def evaluate(self, context):
        return self.value

    def __repr__(self):
        return repr(self.value)


class Number(Expr):

    def __init__(self, value: float):
        self.value = float(value)

    def evaluate(self, context):
        return self.value

    def __repr__(self):
        return string_value(self.value)


class VariableReference(Expr):

    def __init__(self, name: str):
        self.name = name

    def evaluate(self, context):
        try:
            value = context.variables[self.name]
        except KeyError:
            raise XPathEvaluationError(f"undefined variable ${self.name}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        if isinstance(value, (tuple, set)):
            return document_order(value, context.order)
        return value


class FunctionCall(Expr):

    def __init__(self, name: str, args: List[Expr], expression: str = "", offset: int = -1):
        self.name = name
        self.args = args
        self._function = lookup(name, len(args), expression, offset).implementation

    def evaluate(self, context):
        return self._function(context, *[arg.evaluate(context) for arg in self.args])

    def __repr__(self):
        return f"{self.name}({', '.join(repr(arg) for arg in self.args)})"


# Operators

class OrExpr(Expr):

    def __init__(self, left: Expr, right: Expr):
        self.left = left
        self.right = right

    def evaluate(self, context):
        return boolean_value(self.left.evaluate(context)) or boolean_value(self.right.evaluate(context))


class AndExpr(Expr):

    def __init__(self, left: Expr, right: Expr):
        self.left = left
        self.right = right

    def evaluate(self, context):
        return boolean_value(self.left.evaluate(context)) and boolean_value(self.right.evaluate(context))


_RELATIONAL = {
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
}


def _compare_atomic(op: str, left: Any, right: Any) -> bool:
    if op in ('=', '!='):
        if isinstance(left, bool) or isinstance(right, bool):
            left, right = boolean_value(left), boolean_value(right)
        elif isinstance(left, float) or isinstance(right, float):
            left, right = number_value(left), number_value(right)
        else:
            left, right = string_value(left), string_value(right)
        return left == right if op == '=' else left != right
    return _RELATIONAL[op](number_value(left), number_value(right))


def compare(op: str, left: Any, right: Any) -> bool:
    """Compare two XPath values with the existential node-set semantics."""
    left_nodes, right_nodes = is_node_set(left), is_node_set(right)
    if left_nodes and right_nodes:
        right_values = [node.value for node in right]
        return any(_compare_atomic(op, node.value, value)
                   for node in left for value in right_values)
    if left_nodes:
        if isinstance(right, bool):
            return _compare_atomic(op, boolean_value(left), right)
        return any(_compare_atomic(op, node.value, right) for node in left)
    if right_nodes:
        if isinstance(left, bool):
            return _compare_atomic(op, left, boolean_value(right))
        return any(_compare_atomic(op, left, node.value) for node in right)
    return _compare_atomic(op, left, right)


class Comparison(Expr):

    def __init__(self, op: str, left: Expr, right: Expr):
        self.op = op
        self.left = left
        self.right = right

    def evaluate(self, context):
        return compare(self.op, self.left.evaluate(context), self.right.evaluate(context))

    def __repr__(self):
        return f"{self.left!r} {self.op} {self.right!r}"


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1, right)
    return left / right


def _modulo(left: float, right: float) -> float:
    if right == 0 or math.isnan(left) or math.isnan(right) or math.isinf(left):
        return math.nan
    if math.isinf(right):
        return left
    return math.fmod(left, right)


_ARITHMETIC = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    'div': _divide,
    'mod': _modulo,
}


class Arithmetic(Expr):

    def __init__(self, op: str, left: Expr, right: Expr):
        self.op = op
        self.left = left
        self.right = right
        self._operator = _ARITHMETIC[op]

    def evaluate(self, context):
        return self._operator(number_value(self.left.evaluate(context)),
                              number_value(self.right.evaluate(context)))

    def __repr__(self):
        return f"{self.left!r} {self.op} {self.right!r}"


class Negate(Expr):

    def __init__(self, operand: Expr):
        self.operand = operand

    def evaluate(self, context):
        return -number_value(self.operand.evaluate(context))
