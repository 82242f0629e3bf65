"""
Utility modules for htmlquery.
"""

from htmlquery.utils.config import Config
from htmlquery.utils.logging import (PerformanceLogger, get_default_log_file,
                                     log_exception, setup_logging)

__all__ = [
    'Config',
    'setup_logging',
    'get_default_log_file',
    'log_exception',
    'PerformanceLogger',
]
