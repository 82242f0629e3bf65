"""
Compiled XPath expressions.
"""

from typing import Any, Dict, Iterator, Optional

from .expr import Context, Expr
from .navigator import XPathNavigator
from .parser import XPathParser


class Expression:
    """
    A compiled XPath expression.

    Instances are immutable and can be evaluated any number of times,
    against any navigator, from any thread.
    """

    __slots__ = ('_text', '_root')

    def __init__(self, text: str, root: Expr):
        self._text = text
        self._root = root

    @property
    def text(self) -> str:
        """The source text the expression was compiled from."""
        return self._text

    def evaluate(self, navigator: XPathNavigator,
                 variables: Optional[Dict[str, Any]] = None) -> Any:
        """
        Evaluate the expression with the navigator as context node.

        Args:
            navigator: The context position; it is not moved
            variables: Values for ``$name`` references

        Returns:
            A list of navigators for node-sets, otherwise str, float or bool
        """
        return self._root.evaluate(Context(navigator, 1, 1, variables))

    def select(self, navigator: XPathNavigator,
               variables: Optional[Dict[str, Any]] = None) -> Iterator[XPathNavigator]:
        """
        Iterate over the nodes selected by the expression, in document order.

        Location paths are walked as the iterator is consumed, so taking
        only the first node skips the rest of the evaluation. Errors raised
        by predicates surface while iterating.

        Raises:
            XPathTypeError: If the expression does not produce a node-set
        """
        return self._root.iterate(Context(navigator, 1, 1, variables))

    def __repr__(self):
        return f"{type(self).__name__}({self._text!r})"

    def __str__(self):
        return self._text


def compile(text: str) -> Expression:
    """
    Compile an XPath expression.

    Raises:
        XPathSyntaxError: If the text is not a valid expression
    """
    if not isinstance(text, str):
        raise TypeError(f"expression must be a string, not {type(text).__name__}")
    return Expression(text, XPathParser(text).parse())
