"""
Markup parsing for htmlquery.
"""

from .html_parser import HTMLParser, parse

__all__ = ['HTMLParser', 'parse']
