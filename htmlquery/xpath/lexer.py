"""
XPath tokenizer.

Splits an expression into tokens and applies the lexical disambiguation
rules of XPath 1.0 (section 3.7): whether ``*`` and the names ``and``,
``or``, ``div`` and ``mod`` are operators depends on the preceding token,
and whether a name is a function name, a node type or an axis depends on
what follows it.
"""

import re
from typing import Any, List, NamedTuple

from .errors import XPathSyntaxError

AXIS_NAMES = frozenset([
    'ancestor', 'ancestor-or-self', 'attribute', 'child', 'descendant',
    'descendant-or-self', 'following', 'following-sibling', 'namespace',
    'parent', 'preceding', 'preceding-sibling', 'self',
])

NODE_TYPES = frozenset(['comment', 'text', 'processing-instruction', 'node'])

OPERATOR_NAMES = frozenset(['and', 'or', 'div', 'mod'])

OPERATOR_SYMBOLS = frozenset(['/', '//', '|', '+', '-', '=', '!=', '<', '<=', '>', '>='])

_NO_OPERATOR_AFTER = frozenset(['@', '::', '(', '[', ',']) | OPERATOR_SYMBOLS

_NCNAME = r'[^\W\d][\w.\-]*'

_TOKEN_RE = re.compile(r'''
    (?P<space>\s+)
  | (?P<number>\d+(?:\.\d*)?|\.\d+)
  | (?P<literal>"[^"]*"|'[^']*')
  | (?P<variable>\$%(name)s(?::%(name)s)?)
  | (?P<name>\*|%(name)s(?::(?:\*|%(name)s))?)
  | (?P<symbol>\.\.|::|//|!=|<=|>=|[()\[\].@,/|+\-=<>])
''' % {'name': _NCNAME}, re.VERBOSE)


class Token(NamedTuple):
    """
    A lexical token.

    ``kind`` is one of: number, literal, variable, name (a name test),
    nodetype, function, axis, operator (``*``, and, or, div, mod),
    symbol (punctuation and symbolic operators) or eof.
    """
    kind: str
    value: Any
    offset: int


def _expects_operator(tokens: List[Token]) -> bool:
    if not tokens:
        return False
    last = tokens[-1]
    if last.kind == 'operator':
        return False
    if last.kind == 'symbol' and last.value in _NO_OPERATOR_AFTER:
        return False
    return True


def _classify_name(tokens: List[Token], value: str, text: str, end: int, start: int) -> Token:
    if _expects_operator(tokens):
        if value == '*' or value in OPERATOR_NAMES:
            return Token('operator', value, start)
        raise XPathSyntaxError(f"expected an operator, found {value!r}", text, start)

    following = text[end:].lstrip()
    if value != '*' and following.startswith('::'):
        if value not in AXIS_NAMES:
            raise XPathSyntaxError(f"unknown axis {value!r}", text, start)
        return Token('axis', value, start)
    if value != '*' and following.startswith('('):
        if value in NODE_TYPES:
            return Token('nodetype', value, start)
        return Token('function', value, start)
    return Token('name', value, start)


def tokenize(text: str) -> List[Token]:
    """
    Tokenize an XPath expression.

    Args:
        text: The expression text

    Returns:
        The list of tokens, terminated by an ``eof`` token

    Raises:
        XPathSyntaxError: If the text contains characters that start no token
    """
    tokens: List[Token] = []
    position = 0
    while position < len(text):
        match = _TOKEN_RE.match(text, position)
        if match is None:
            raise XPathSyntaxError(f"unexpected character {text[position]!r}", text, position)
        start, position = match.start(), match.end()
        kind = match.lastgroup
        value = match.group(kind)

        if kind == 'space':
            continue
        if kind == 'number':
            tokens.append(Token('number', float(value), start))
        elif kind == 'literal':
            tokens.append(Token('literal', value[1:-1], start))
        elif kind == 'variable':
            tokens.append(Token('variable', value[1:], start))
        elif kind == 'name':
            tokens.append(_classify_name(tokens, value, text, position, start))
        else:
            tokens.append(Token('symbol', value, start))

    tokens.append(Token('eof', None, len(text)))
    return tokens
