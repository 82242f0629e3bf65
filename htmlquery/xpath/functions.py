"""
XPath core function library.

Functions are registered with their arity so that calls can be checked
when an expression is compiled. Every function receives the evaluation
context first, followed by its already evaluated arguments.
"""

import math
import re
from typing import Any, Callable, Dict, NamedTuple, Optional

from .axes import descendant_or_self_axis
from .errors import XPathSyntaxError, XPathTypeError
from .navigator import NodeKind
from .values import boolean_value, is_node_set, number_value, string_value


class FunctionSpec(NamedTuple):
    name: str
    implementation: Callable[..., Any]
    min_args: int
    max_args: Optional[int]


_FUNCTIONS: Dict[str, FunctionSpec] = {}


def xpath_function(name: str, min_args: int = 0, max_args: Optional[int] = 0):
    """Register an implementation under an XPath function name."""
    def decorator(func):
        _FUNCTIONS[name] = FunctionSpec(name, func, min_args, max_args)
        return func
    return decorator


def lookup(name: str, arg_count: int, expression: str = "", offset: int = -1) -> FunctionSpec:
    """
    Find a function and check the number of arguments it is called with.

    Raises:
        XPathSyntaxError: If the function is unknown or the arity is wrong
    """
    spec = _FUNCTIONS.get(name)
    if spec is None:
        raise XPathSyntaxError(f"unknown function {name}()", expression, offset)
    if arg_count < spec.min_args or (spec.max_args is not None and arg_count > spec.max_args):
        raise XPathSyntaxError(
            f"wrong number of arguments for {name}(): {arg_count}", expression, offset)
    return spec


def _node_set(value, name):
    if not is_node_set(value):
        raise XPathTypeError(f"{name}() expects a node-set argument")
    return value


def _context_string(context, args):
    return string_value(args[0]) if args else context.node.value


def _first_node(context, args, name):
    if not args:
        return context.node
    nodes = _node_set(args[0], name)
    return nodes[0] if nodes else None


def _round_half_up(number: float) -> float:
    if math.isnan(number) or math.isinf(number):
        return number
    return float(math.floor(number + 0.5))


# Node-set functions

@xpath_function('last')
def _last(context):
    return float(context.size)


@xpath_function('position')
def _position(context):
    return float(context.position)


@xpath_function('count', 1, 1)
def _count(context, nodes):
    return float(len(_node_set(nodes, 'count')))


@xpath_function('local-name', 0, 1)
def _local_name(context, *args):
    node = _first_node(context, args, 'local-name')
    return node.local_name if node is not None else ""


@xpath_function('name', 0, 1)
def _name(context, *args):
    node = _first_node(context, args, 'name')
    if node is None:
        return ""
    if node.prefix:
        return f"{node.prefix}:{node.local_name}"
    return node.local_name


@xpath_function('namespace-uri', 0, 1)
def _namespace_uri(context, *args):
    _first_node(context, args, 'namespace-uri')
    return ""


@xpath_function('id', 1, 1)
def _id(context, value):
    if is_node_set(value):
        wanted = set()
        for node in value:
            wanted.update(node.value.split())
    else:
        wanted = set(string_value(value).split())

    root = context.node.copy()
    while root.move_to_parent():
        pass
    result = []
    for node in descendant_or_self_axis(root):
        if node.node_type != NodeKind.ELEMENT:
            continue
        attribute = node.copy()
        while attribute.move_to_next_attribute():
            if attribute.local_name == 'id' and attribute.value in wanted:
                result.append(node)
                break
    return result


# String functions

@xpath_function('string', 0, 1)
def _string(context, *args):
    return _context_string(context, args)


@xpath_function('concat', 2, None)
def _concat(context, *args):
    return "".join(string_value(arg) for arg in args)


@xpath_function('starts-with', 2, 2)
def _starts_with(context, string, prefix):
    return string_value(string).startswith(string_value(prefix))


@xpath_function('ends-with', 2, 2)
def _ends_with(context, string, suffix):
    return string_value(string).endswith(string_value(suffix))


@xpath_function('contains', 2, 2)
def _contains(context, string, part):
    return string_value(part) in string_value(string)


@xpath_function('substring-before', 2, 2)
def _substring_before(context, string, separator):
    string, separator = string_value(string), string_value(separator)
    index = string.find(separator)
    return string[:index] if index >= 0 else ""


@xpath_function('substring-after', 2, 2)
def _substring_after(context, string, separator):
    string, separator = string_value(string), string_value(separator)
    index = string.find(separator)
    return string[index + len(separator):] if index >= 0 else ""


@xpath_function('substring', 2, 3)
def _substring(context, string, start, *length):
    string = string_value(string)
    first = _round_half_up(number_value(start))
    if length:
        end = first + _round_half_up(number_value(length[0]))
    else:
        end = math.inf
    if math.isnan(first) or math.isnan(end):
        return ""
    return "".join(char for position, char in enumerate(string, 1)
                   if first <= position < end)


@xpath_function('string-length', 0, 1)
def _string_length(context, *args):
    return float(len(_context_string(context, args)))


@xpath_function('normalize-space', 0, 1)
def _normalize_space(context, *args):
    return " ".join(_context_string(context, args).split())


@xpath_function('translate', 3, 3)
def _translate(context, string, source, target):
    string, source, target = string_value(string), string_value(source), string_value(target)
    table = {}
    for index, char in enumerate(source):
        if ord(char) in table:
            continue
        table[ord(char)] = target[index] if index < len(target) else None
    return string.translate(table)


@xpath_function('lower-case', 1, 1)
def _lower_case(context, string):
    return string_value(string).lower()


@xpath_function('upper-case', 1, 1)
def _upper_case(context, string):
    return string_value(string).upper()


_FLAG_MAP = {'i': re.IGNORECASE, 'm': re.MULTILINE, 's': re.DOTALL, 'x': re.VERBOSE}


@xpath_function('matches', 2, 3)
def _matches(context, string, pattern, *flags):
    value = 0
    for flag in (string_value(flags[0]) if flags else ""):
        value |= _FLAG_MAP.get(flag, 0)
    try:
        return re.search(string_value(pattern), string_value(string), value) is not None
    except re.error as e:
        raise XPathTypeError(f"invalid regular expression in matches(): {e}") from e


# Boolean functions

@xpath_function('boolean', 1, 1)
def _boolean(context, value):
    return boolean_value(value)


@xpath_function('not', 1, 1)
def _not(context, value):
    return not boolean_value(value)


@xpath_function('true')
def _true(context):
    return True


@xpath_function('false')
def _false(context):
    return False


@xpath_function('lang', 1, 1)
def _lang(context, language):
    language = string_value(language).lower()
    node = context.node.copy()
    if node.node_type == NodeKind.ATTRIBUTE:
        node.move_to_parent()
    while True:
        attribute = node.copy()
        while attribute.move_to_next_attribute():
            if attribute.local_name == 'lang':
                declared = attribute.value.lower()
                return declared == language or declared.startswith(language + '-')
        if not node.move_to_parent():
            return False


# Number functions

@xpath_function('number', 0, 1)
def _number(context, *args):
    return number_value(args[0]) if args else number_value(context.node.value)


@xpath_function('sum', 1, 1)
def _sum(context, nodes):
    return float(sum(number_value(node.value) for node in _node_set(nodes, 'sum')))


@xpath_function('floor', 1, 1)
def _floor(context, number):
    number = number_value(number)
    if math.isnan(number) or math.isinf(number):
        return number
    return float(math.floor(number))


@xpath_function('ceiling', 1, 1)
def _ceiling(context, number):
    number = number_value(number)
    if math.isnan(number) or math.isinf(number):
        return number
    return float(math.ceil(number))


@xpath_function('round', 1, 1)
def _round(context, number):
    return _round_half_up(number_value(number))
