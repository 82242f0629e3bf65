"""
Recursive descent parser for XPath 1.0 expressions.
"""

from typing import List, Optional

from .errors import XPathSyntaxError
from .expr import (AndExpr, Arithmetic, Comparison, Expr, FilterExpr,
                   FunctionCall, KindTest, Literal, LocationPath, NameTest,
                   Negate, Number, OrExpr, PathExpr, Step, UnionExpr,
                   VariableReference, descendant_or_self_step)
from .lexer import Token, tokenize
from .navigator import NodeKind


class XPathParser:
    """Builds an expression tree from the token stream of one expression."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    @property
    def cur_token(self) -> Token:
        return self.tokens[self.pos]

    def next_token(self) -> Token:
        token = self.tokens[self.pos]
        if token.kind != 'eof':
            self.pos += 1
        return token

    def at_end(self) -> bool:
        return self.cur_token.kind == 'eof'

    def _check(self, kind: str, *values) -> bool:
        token = self.cur_token
        return token.kind == kind and (not values or token.value in values)

    def _accept(self, kind: str, *values) -> Optional[Token]:
        if self._check(kind, *values):
            return self.next_token()
        return None

    def _expect(self, kind: str, value=None) -> Token:
        if value is None:
            token = self._accept(kind)
        else:
            token = self._accept(kind, value)
        if token is None:
            wanted = repr(value) if value is not None else kind
            raise self._error(f"expected {wanted}")
        return token

    def _error(self, message: str) -> XPathSyntaxError:
        token = self.cur_token
        if token.kind == 'eof':
            message = f"{message}, found end of expression"
        else:
            message = f"{message}, found {token.value!r}"
        return XPathSyntaxError(message, self.text, token.offset)

    def parse(self) -> Expr:
        """
        Parse the whole expression.

        Returns:
            The root of the expression tree

        Raises:
            XPathSyntaxError: If the expression is not valid XPath
        """
        expr = self._or_expr()
        if not self.at_end():
            raise self._error("unexpected token")
        return expr

    # Operators, lowest precedence first

    def _or_expr(self) -> Expr:
        expr = self._and_expr()
        while self._accept('operator', 'or'):
            expr = OrExpr(expr, self._and_expr())
        return expr

    def _and_expr(self) -> Expr:
        expr = self._equality_expr()
        while self._accept('operator', 'and'):
            expr = AndExpr(expr, self._equality_expr())
        return expr

    def _equality_expr(self) -> Expr:
        expr = self._relational_expr()
        while True:
            token = self._accept('symbol', '=', '!=')
            if token is None:
                return expr
            expr = Comparison(token.value, expr, self._relational_expr())

    def _relational_expr(self) -> Expr:
        expr = self._additive_expr()
        while True:
            token = self._accept('symbol', '<', '<=', '>', '>=')
            if token is None:
                return expr
            expr = Comparison(token.value, expr, self._additive_expr())

    def _additive_expr(self) -> Expr:
        expr = self._multiplicative_expr()
        while True:
            token = self._accept('symbol', '+', '-')
            if token is None:
                return expr
            expr = Arithmetic(token.value, expr, self._multiplicative_expr())

    def _multiplicative_expr(self) -> Expr:
        expr = self._unary_expr()
        while True:
            token = self._accept('operator', '*', 'div', 'mod')
            if token is None:
                return expr
            expr = Arithmetic(token.value, expr, self._unary_expr())

    def _unary_expr(self) -> Expr:
        if self._accept('symbol', '-'):
            return Negate(self._unary_expr())
        return self._union_expr()

    def _union_expr(self) -> Expr:
        expr = self._path_expr()
        while self._accept('symbol', '|'):
            expr = UnionExpr(expr, self._path_expr())
        return expr

    # Paths

    def _starts_filter_expr(self) -> bool:
        token = self.cur_token
        if token.kind in ('variable', 'literal', 'number', 'function'):
            return True
        return token.kind == 'symbol' and token.value == '('

    def _starts_step(self) -> bool:
        token = self.cur_token
        if token.kind in ('name', 'nodetype', 'axis'):
            return True
        return token.kind == 'symbol' and token.value in ('@', '.', '..')

    def _path_expr(self) -> Expr:
        if not self._starts_filter_expr():
            return self._location_path()

        expr = self._filter_expr()
        if self._accept('symbol', '//'):
            steps = [descendant_or_self_step()]
        elif self._accept('symbol', '/'):
            steps = []
        else:
            return expr
        steps.extend(self._relative_location_path())
        return PathExpr(expr, steps)

    def _filter_expr(self) -> Expr:
        primary = self._primary_expr()
        predicates = self._predicates()
        if predicates:
            return FilterExpr(primary, predicates)
        return primary

    def _location_path(self) -> Expr:
        if self._accept('symbol', '/'):
            steps = self._relative_location_path() if self._starts_step() else []
            return LocationPath(steps, absolute=True)
        if self._accept('symbol', '//'):
            steps = [descendant_or_self_step()]
            steps.extend(self._relative_location_path())
            return LocationPath(steps, absolute=True)
        return LocationPath(self._relative_location_path())

    def _relative_location_path(self) -> List[Step]:
        steps = [self._step()]
        while True:
            if self._accept('symbol', '//'):
                steps.append(descendant_or_self_step())
            elif not self._accept('symbol', '/'):
                return steps
            steps.append(self._step())

    def _step(self) -> Step:
        if self._accept('symbol', '.'):
            return Step('self', KindTest('node'))
        if self._accept('symbol', '..'):
            return Step('parent', KindTest('node'))

        if self._check('axis'):
            axis = self.next_token().value
            self._expect('symbol', '::')
        elif self._accept('symbol', '@'):
            axis = 'attribute'
        else:
            axis = 'child'

        node_test = self._node_test(axis)
        return Step(axis, node_test, self._predicates())

    def _node_test(self, axis: str):
        token = self.cur_token
        if token.kind == 'name':
            self.next_token()
            principal = NodeKind.ATTRIBUTE if axis == 'attribute' else NodeKind.ELEMENT
            if token.value == '*':
                return NameTest(principal, None, None)
            prefix, _, name = token.value.rpartition(':')
            return NameTest(principal, prefix or None, None if name == '*' else name)

        if token.kind == 'nodetype':
            self.next_token()
            self._expect('symbol', '(')
            if token.value == 'processing-instruction':
                self._accept('literal')
            self._expect('symbol', ')')
            return KindTest(token.value)

        raise self._error("expected a node test")

    def _predicates(self) -> List[Expr]:
        predicates = []
        while self._accept('symbol', '['):
            predicates.append(self._or_expr())
            self._expect('symbol', ']')
        return predicates

    # Primary expressions

    def _primary_expr(self) -> Expr:
        token = self.next_token()
        if token.kind == 'variable':
            return VariableReference(token.value)
        if token.kind == 'literal':
            return Literal(token.value)
        if token.kind == 'number':
            return Number(token.value)
        if token.kind == 'function':
            return self._function_call(token)
        # opening parenthesis, checked by _starts_filter_expr
        expr = self._or_expr()
        self._expect('symbol', ')')
        return expr

    def _function_call(self, token: Token) -> Expr:
        self._expect('symbol', '(')
        args = []
        if not self._accept('symbol', ')'):
            args.append(self._or_expr())
            while self._accept('symbol', ','):
                args.append(self._or_expr())
            self._expect('symbol', ')')
        return FunctionCall(token.value, args, self.text, token.offset)
