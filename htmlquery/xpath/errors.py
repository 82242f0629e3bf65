"""
Exceptions raised by the XPath engine.
"""


class XPathError(Exception):
    """Base class for all XPath errors."""


class XPathSyntaxError(XPathError):
    """
    Exception raised when an expression cannot be compiled.

    The offset points at the character where the problem was detected,
    or is -1 when no position is known.
    """

    def __init__(self, message: str, expression: str = "", offset: int = -1):
        if offset >= 0:
            message = f"{message} (at offset {offset} in {expression!r})"
        elif expression:
            message = f"{message} (in {expression!r})"
        super().__init__(message)
        self.expression = expression
        self.offset = offset


class XPathEvaluationError(XPathError):
    """Exception raised when a compiled expression fails at evaluation time."""


class XPathTypeError(XPathEvaluationError):
    """Exception raised when a value has the wrong type for its use."""
