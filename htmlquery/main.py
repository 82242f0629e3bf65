#!/usr/bin/env python3
"""
htmlquery - run XPath or CSS queries against HTML documents

Command line entry point: loads a document from a URL, a file or
standard input and prints the matching nodes.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .dom import Node
from .exceptions import LoadError, ParseError, QueryError
from .network import DocumentLoader
from .parser import parse
from .query import ExpressionCache, QueryExecutor, css_to_xpath
from .utils.config import Config
from .utils.logging import (PerformanceLogger, get_default_log_file, log_exception,
                            setup_logging)
from .xpath.values import string_value

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_BAD_EXPRESSION = 2


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="htmlquery",
        description="Run an XPath (or CSS) query against an HTML document")
    parser.add_argument('source', help='URL, file path, or - for standard input')
    parser.add_argument('expression', help='XPath expression, or CSS selector with --css')
    parser.add_argument('--css', action='store_true', help='Treat the expression as a CSS selector')
    parser.add_argument('--first', action='store_true', help='Print only the first match')
    parser.add_argument('--output', choices=['text', 'html', 'inner-html'], default='text',
                        help='What to print for each matching node (default: text)')
    parser.add_argument('--attr', metavar='NAME', default=None,
                        help='Print the value of this attribute of each match')
    parser.add_argument('--config', metavar='PATH', default=None, help='JSON configuration file')
    parser.add_argument('--no-cache', action='store_true', help='Disable the expression cache')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--log-file', metavar='PATH', nargs='?', const='', default=None,
                        help='Also log to this file; without PATH, to the dated file '
                             'in ~/.htmlquery/logs')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def format_node(node: Node, output: str, attr: Optional[str] = None) -> str:
    """Render one result for printing."""
    if attr is not None:
        return node.select_attr(attr)
    if output == 'html':
        return node.outer_html
    if output == 'inner-html':
        return node.inner_html
    return node.inner_text


def load_source(source: str, config: Config):
    """Load a document from a URL, a file, or standard input for ``-``."""
    if source == '-':
        return parse(sys.stdin.buffer.read())
    return DocumentLoader(config).load(source)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line tool."""
    args = parse_arguments(argv)

    config = Config(args.config)
    console_level = "DEBUG" if args.debug else config.get("logging.level", "WARNING")
    log_file = args.log_file
    if log_file == '':
        log_file = get_default_log_file()
    setup_logging(log_file, console_level=console_level)
    perf = PerformanceLogger(logger, "htmlquery")

    cache = ExpressionCache.from_config(config)
    if args.no_cache:
        cache.enabled = False
    executor = QueryExecutor(cache)

    try:
        with perf.measure("load"):
            document = load_source(args.source, config)
    except (LoadError, ParseError) as e:
        if args.debug:
            log_exception(logger, e, "Could not load document")
        print(f"htmlquery: {e}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    try:
        with perf.measure("query"):
            expression = css_to_xpath(args.expression) if args.css else args.expression
            result = executor.evaluate(document, expression)
    except QueryError as e:
        print(f"htmlquery: {e}", file=sys.stderr)
        return EXIT_BAD_EXPRESSION

    if not isinstance(result, list):
        print(string_value(result))
        return EXIT_OK

    if args.first:
        result = result[:1]
    for node in result:
        print(format_node(node, args.output, args.attr))
    logger.debug(f"{len(result)} nodes printed")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
