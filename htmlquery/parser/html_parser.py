"""
HTML parser implementation.
This module turns markup into a document tree, using BeautifulSoup with
the html5lib tree builder so documents are parsed the way browsers do.
"""

import logging
import re
from typing import IO, Optional, Union

from bs4 import (BeautifulSoup, CData, Comment as SoupComment, Declaration,
                 Doctype, NavigableString, ProcessingInstruction, Tag)

from ..dom import Comment, Document, DocumentType, Element, Node, Text
from ..exceptions import ParseError

logger = logging.getLogger(__name__)

Markup = Union[str, bytes, IO]

# bs4 stores a doctype as its declaration text, e.g. html PUBLIC "..." "..."
_DOCTYPE_RE = re.compile(
    r'^\s*(?P<name>[^\s"]*)'
    r'(?:\s+PUBLIC\s+"(?P<public>[^"]*)"(?:\s+"(?P<system>[^"]*)")?'
    r'|\s+SYSTEM\s+"(?P<system_only>[^"]*)")?',
    re.IGNORECASE)


class HTMLParser:
    """HTML parser using BeautifulSoup with html5lib for full HTML5 support."""

    def __init__(self):
        """Initialize the HTML parser."""
        logger.debug("HTML parser initialized")

    def parse(self, markup: Markup, from_encoding: Optional[str] = None,
              url: Optional[str] = None) -> Document:
        """
        Parse markup into a document tree.

        Args:
            markup: HTML as text, bytes or a readable file object
            from_encoding: Encoding of byte input when it is known, e.g.
                from a Content-Type header; detected otherwise
            url: Where the markup came from, kept on the document

        Returns:
            The parsed document

        Raises:
            ParseError: If the markup cannot be read or parsed
        """
        try:
            if hasattr(markup, 'read'):
                markup = markup.read()
            if not isinstance(markup, (str, bytes)):
                raise TypeError(f"cannot parse {type(markup).__name__}")

            options = {'multi_valued_attributes': None}
            if isinstance(markup, bytes) and from_encoding:
                options['from_encoding'] = from_encoding
            soup = BeautifulSoup(markup, 'html5lib', **options)
        except Exception as e:
            raise ParseError(f"Error parsing HTML: {e}") from e

        document = self._build_tree(soup, Document(url))
        logger.debug(f"Parsed {len(markup)} characters of markup"
                     f"{f' from {url}' if url else ''}")
        return document

    def _build_tree(self, soup: BeautifulSoup, document: Document) -> Document:
        """
        Copy a BeautifulSoup tree into htmlquery nodes.

        Args:
            soup: The parsed soup
            document: The empty document to fill

        Returns:
            The filled document
        """
        stack = [(soup, document)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                node = self._convert(child)
                if node is None:
                    continue
                target.append_child(node)
                if isinstance(child, Tag):
                    stack.append((child, node))
        return document

    def _convert(self, item) -> Optional[Node]:
        # Doctype and Comment are NavigableString subclasses, so check them first
        if isinstance(item, Tag):
            element = Element(item.name, item.namespace)
            for key, value in item.attrs.items():
                if isinstance(value, list):
                    value = " ".join(value)
                prefix = getattr(key, 'prefix', None)
                if prefix:
                    element.set_attribute(key.name, value, prefix)
                else:
                    element.set_attribute(str(key), value)
            return element
        if isinstance(item, Doctype):
            return self._convert_doctype(str(item))
        if isinstance(item, SoupComment):
            return Comment(str(item))
        if isinstance(item, CData):
            return Text(str(item))
        if isinstance(item, (ProcessingInstruction, Declaration)):
            return None
        if isinstance(item, NavigableString):
            return Text(str(item))
        return None

    def _convert_doctype(self, declaration: str) -> DocumentType:
        match = _DOCTYPE_RE.match(declaration)
        name = match.group('name')
        public_id = match.group('public') or ""
        system_id = match.group('system') or match.group('system_only') or ""
        return DocumentType(name, public_id, system_id)


_parser = HTMLParser()


def parse(markup: Markup, from_encoding: Optional[str] = None,
          url: Optional[str] = None) -> Document:
    """
    Parse HTML into a document tree.

    Args:
        markup: HTML as text, bytes or a readable file object
        from_encoding: Encoding of byte input, if known

    Returns:
        The parsed document

    Raises:
        ParseError: If the markup cannot be parsed
    """
    return _parser.parse(markup, from_encoding, url)
