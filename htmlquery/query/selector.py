"""
CSS selector support.

Selectors are translated to XPath with cssselect and then run like any
other expression.
"""

import functools
import logging

import cssselect

from ..exceptions import CompileError

logger = logging.getLogger(__name__)

_translator = cssselect.HTMLTranslator()


@functools.lru_cache(maxsize=256)
def css_to_xpath(selector: str) -> str:
    """
    Translate a CSS selector to an XPath expression.

    Args:
        selector: A CSS3 selector, e.g. ``nav a[href^="/"]``

    Returns:
        An expression selecting the matching elements at or below the context node

    Raises:
        CompileError: If the selector is not valid
    """
    try:
        expression = _translator.css_to_xpath(selector)
    except cssselect.SelectorError as e:
        raise CompileError(selector, f"Invalid CSS selector: {e}") from e
    logger.debug(f"Translated selector {selector!r} to {expression!r}")
    return expression
