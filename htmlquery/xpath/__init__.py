"""
XPath 1.0 engine working on any tree exposed through a navigator.

The engine compiles expressions once and evaluates them by moving
:class:`XPathNavigator` cursors, so it has no knowledge of the concrete
node classes of the tree being queried.
"""

from .errors import XPathError, XPathEvaluationError, XPathSyntaxError, XPathTypeError
from .expression import Expression, compile
from .navigator import NodeKind, XPathNavigator

__all__ = [
    'Expression', 'compile', 'NodeKind', 'XPathNavigator',
    'XPathError', 'XPathSyntaxError', 'XPathEvaluationError', 'XPathTypeError',
]
