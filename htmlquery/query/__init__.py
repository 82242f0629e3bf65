"""
Query execution and expression caching.
"""

from .cache import DEFAULT_MAX_ENTRIES, ExpressionCache
from .executor import QueryExecutor, get_default_executor, set_default_executor
from .selector import css_to_xpath

__all__ = [
    'ExpressionCache', 'DEFAULT_MAX_ENTRIES', 'QueryExecutor',
    'get_default_executor', 'set_default_executor', 'css_to_xpath',
]
