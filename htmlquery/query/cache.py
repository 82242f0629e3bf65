"""
Cache of compiled XPath expressions.

Programs tend to run a small, fixed set of expressions over many
documents, so compiled expressions are kept by their text. The cache is
bounded; when a new entry would exceed the bound the whole cache is
emptied before the entry is added.
"""

import logging
import threading
from typing import Dict, Optional

from .. import xpath
from ..exceptions import CompileError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 50


class ExpressionCache:
    """
    Thread-safe cache mapping expression text to compiled expressions.

    Attributes:
        enabled: When False every lookup compiles and nothing is stored
        max_entries: Upper bound on the number of stored expressions;
            zero or less disables storage like ``enabled = False``
        hits: Number of lookups served from the cache
        misses: Number of lookups that compiled
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES, enabled: bool = True):
        self.max_entries = max_entries
        self.enabled = enabled
        self.hits = 0
        self.misses = 0
        self._entries: Dict[str, xpath.Expression] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config) -> 'ExpressionCache':
        """
        Create a cache from the ``cache`` section of a configuration.

        Args:
            config: A :class:`htmlquery.utils.config.Config`
        """
        return cls(max_entries=int(config.get('cache.max_entries', DEFAULT_MAX_ENTRIES)),
                   enabled=bool(config.get('cache.enabled', True)))

    def get_or_compile(self, text: str) -> xpath.Expression:
        """
        Get the compiled form of an expression, compiling it on a miss.

        Args:
            text: The expression text

        Returns:
            The compiled expression

        Raises:
            CompileError: If the expression is not valid; failures are not cached
        """
        with self._lock:
            if self.enabled and self.max_entries > 0:
                expression = self._entries.get(text)
                if expression is not None:
                    self.hits += 1
                    return expression

            self.misses += 1
            expression = self._compile(text)

            if self.enabled and self.max_entries > 0:
                if len(self._entries) >= self.max_entries:
                    logger.debug(f"Expression cache full ({len(self._entries)} entries), clearing")
                    self._entries.clear()
                self._entries[text] = expression
            return expression

    def _compile(self, text: str) -> xpath.Expression:
        try:
            expression = xpath.compile(text)
        except xpath.XPathSyntaxError as e:
            raise CompileError(text, str(e)) from e
        except TypeError as e:
            raise CompileError(str(text), str(e)) from e
        logger.debug(f"Compiled expression {text!r}")
        return expression

    def get(self, text: str) -> Optional[xpath.Expression]:
        """Get a cached expression without compiling."""
        with self._lock:
            return self._entries.get(text)

    def clear(self) -> None:
        """Remove all cached expressions."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, text: str) -> bool:
        with self._lock:
            return text in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self):
        return (f"ExpressionCache(entries={len(self)}, max_entries={self.max_entries}, "
                f"enabled={self.enabled})")
