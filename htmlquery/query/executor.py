"""
Query execution.

The executor resolves an expression through the expression cache, runs it
against a navigator rooted at the queried node and turns the resulting
positions back into nodes.
"""

import logging
import threading
from typing import Any, Hashable, Iterator, List, Optional, Set, Union

from .. import xpath
from ..dom import Element, Node, NodeNavigator
from ..exceptions import FatalQueryError, QueryError
from .cache import ExpressionCache
from .selector import css_to_xpath

logger = logging.getLogger(__name__)

ExpressionLike = Union[str, xpath.Expression]


class QueryExecutor:
    """
    Runs XPath expressions against document trees.

    Args:
        cache: Cache used to compile expression text
    """

    def __init__(self, cache: Optional[ExpressionCache] = None):
        self.cache = cache if cache is not None else ExpressionCache()

    def compile(self, expression: ExpressionLike) -> xpath.Expression:
        """
        Resolve an expression to its compiled form.

        Raises:
            CompileError: If the expression text is not valid
        """
        if isinstance(expression, xpath.Expression):
            return expression
        return self.cache.get_or_compile(expression)

    def _select(self, root: Node, expression: ExpressionLike) -> Iterator[NodeNavigator]:
        return self._positions(self.compile(expression), NodeNavigator(root))

    @staticmethod
    def _positions(compiled: xpath.Expression,
                   navigator: NodeNavigator) -> Iterator[NodeNavigator]:
        try:
            yield from compiled.select(navigator)
        except xpath.XPathError as e:
            raise QueryError(compiled.text, str(e)) from e

    @staticmethod
    def _materialize(navigator: NodeNavigator) -> Node:
        attr = navigator.current_attribute
        if attr is None:
            return navigator.current
        return Element.from_attribute(attr)

    def query_all(self, root: Node, expression: ExpressionLike) -> List[Node]:
        """
        Find all nodes matching an expression.

        Attribute results are returned as detached elements named after
        the attribute, whose text is the attribute value.

        Compiled location paths already yield each position once. The
        executor still skips any position it has returned before, which
        covers expressions whose ``select`` repeats positions, such as
        subclasses of :class:`htmlquery.xpath.Expression`.

        Args:
            root: The context node
            expression: Expression text or a compiled expression

        Returns:
            The matching nodes in document order

        Raises:
            CompileError: If the expression text is not valid
            QueryError: If the expression does not evaluate to a node-set
        """
        results = []
        seen: Set[Hashable] = set()
        for navigator in self._select(root, expression):
            position = navigator.node_key
            if position in seen:
                continue
            seen.add(position)
            results.append(self._materialize(navigator))
        return results

    def query(self, root: Node, expression: ExpressionLike) -> Optional[Node]:
        """
        Find the first node matching an expression.

        Evaluation stops as soon as the first node is found.

        Returns:
            The first matching node, or None

        Raises:
            CompileError: If the expression text is not valid
            QueryError: If the expression does not evaluate to a node-set
        """
        for navigator in self._select(root, expression):
            return self._materialize(navigator)
        return None

    def find(self, root: Node, expression: ExpressionLike) -> List[Node]:
        """
        Like :meth:`query_all`, for expressions that are known to be valid.

        Raises:
            FatalQueryError: If the expression fails
        """
        try:
            return self.query_all(root, expression)
        except QueryError as e:
            raise FatalQueryError(e) from e

    def find_one(self, root: Node, expression: ExpressionLike) -> Optional[Node]:
        """
        Like :meth:`query`, for expressions that are known to be valid.

        Raises:
            FatalQueryError: If the expression fails
        """
        try:
            return self.query(root, expression)
        except QueryError as e:
            raise FatalQueryError(e) from e

    def query_selector_all(self, root: Node, selector: str) -> List[Node]:
        """
        Find all elements matching a CSS selector.

        Raises:
            CompileError: If the selector is not valid
        """
        return self.query_all(root, css_to_xpath(selector))

    def query_selector(self, root: Node, selector: str) -> Optional[Node]:
        """
        Find the first element matching a CSS selector.

        Raises:
            CompileError: If the selector is not valid
        """
        return self.query(root, css_to_xpath(selector))

    def evaluate(self, root: Node, expression: ExpressionLike,
                 variables: Optional[dict] = None) -> Any:
        """
        Evaluate an expression of any type, e.g. ``count(//a)``.

        Args:
            root: The context node
            expression: Expression text or a compiled expression
            variables: Values for ``$name`` references

        Returns:
            A str, float or bool, or a list of nodes for node-sets

        Raises:
            CompileError: If the expression text is not valid
            QueryError: If evaluation fails
        """
        compiled = self.compile(expression)
        try:
            value = compiled.evaluate(NodeNavigator(root), variables)
        except xpath.XPathError as e:
            raise QueryError(compiled.text, str(e)) from e
        if isinstance(value, list):
            return [self._materialize(navigator) for navigator in value]
        return value


_default_executor: Optional[QueryExecutor] = None
_default_lock = threading.Lock()


def get_default_executor() -> QueryExecutor:
    """Get the executor used by the query methods of nodes."""
    global _default_executor
    with _default_lock:
        if _default_executor is None:
            _default_executor = QueryExecutor(ExpressionCache())
        return _default_executor


def set_default_executor(executor: QueryExecutor) -> None:
    """
    Replace the executor used by the query methods of nodes.

    Args:
        executor: The new default executor, e.g. one with a configured cache
    """
    global _default_executor
    with _default_lock:
        _default_executor = executor
    logger.debug(f"Default executor replaced, cache: {executor.cache!r}")
