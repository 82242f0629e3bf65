"""
htmlquery: XPath queries over HTML documents.

    >>> import htmlquery
    >>> doc = htmlquery.parse('<ul><li><a href="/a">A</a></li></ul>')
    >>> [a.attribute_value("href") for a in doc.find("//a")]
    ['/a']
"""

__version__ = "1.0.0"

from .dom import Attr, Comment, Document, DocumentType, Element, Node, NodeType, Text
from .exceptions import (CompileError, FatalQueryError, HTMLQueryError, LoadError,
                         NoSuchAttributeError, NotAnElementError, ParseError, QueryError)
from .network import DocumentLoader, load_doc, load_url
from .parser import parse
from .query import (ExpressionCache, QueryExecutor, get_default_executor,
                    set_default_executor)

__all__ = [
    'parse', 'load_doc', 'load_url', 'DocumentLoader',
    'Node', 'NodeType', 'Element', 'Attr', 'Text', 'Comment', 'Document', 'DocumentType',
    'ExpressionCache', 'QueryExecutor', 'get_default_executor', 'set_default_executor',
    'HTMLQueryError', 'ParseError', 'LoadError', 'NotAnElementError',
    'NoSuchAttributeError', 'QueryError', 'CompileError', 'FatalQueryError',
]
