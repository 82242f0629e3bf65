"""
Loading documents from the network and the file system.
"""

from .loader import DocumentLoader, load_doc, load_url

__all__ = ['DocumentLoader', 'load_doc', 'load_url']
