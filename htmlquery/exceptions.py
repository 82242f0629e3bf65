"""
Exceptions raised by htmlquery.
"""


class HTMLQueryError(Exception):
    """Base class for htmlquery errors."""


class ParseError(HTMLQueryError):
    """Exception raised when markup cannot be turned into a document tree."""


class LoadError(HTMLQueryError):
    """Exception raised when a document cannot be fetched from a URL or file."""


class NotAnElementError(HTMLQueryError):
    """Exception raised when an element-only accessor is used on another node kind."""


class NoSuchAttributeError(HTMLQueryError, KeyError):
    """Exception raised when a node has no attribute with the requested key."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"attribute {self.key!r} not found"


class QueryError(HTMLQueryError):
    """
    Exception raised when a query cannot be compiled or evaluated.

    Attributes:
        expression: The expression text that failed
    """

    def __init__(self, expression: str, message: str):
        super().__init__(message)
        self.expression = expression


class CompileError(QueryError):
    """Exception raised when an expression is not valid."""


class FatalQueryError(RuntimeError):
    """
    Raised by ``find`` and ``find_one`` when the expression fails.

    Those methods are for callers that know their expression is valid.
    This is not a :class:`QueryError`, so handlers for query errors do not
    catch it.
    """

    def __init__(self, error: QueryError):
        super().__init__(str(error))
        self.expression = error.expression
