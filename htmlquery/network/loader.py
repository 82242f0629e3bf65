"""
Document loading from URLs and files.
"""

import logging
import re
from typing import Optional

import certifi
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..dom import Document
from ..exceptions import LoadError
from ..parser import parse
from ..utils.config import Config

logger = logging.getLogger(__name__)

_CHARSET_RE = re.compile(r'charset\s*=\s*["\']?([\w.:-]+)', re.IGNORECASE)


class DocumentLoader:
    """
    Loads and parses documents.

    HTTP requests go through one requests session with retries, the
    certifi CA bundle, and the timeout and user agent from configuration.
    """

    def __init__(self, config: Optional[Config] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the loader.

        Args:
            config: Configuration; defaults are used when None
            session: Session to send requests with; one is created when None
        """
        self.config = config if config is not None else Config()
        self.timeout = self.config.get("network.timeout", 30)
        self.session = session if session is not None else self._create_session()

    def _create_session(self) -> requests.Session:
        """
        Create a new requests session with appropriate configuration.

        Returns:
            A configured requests session
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=int(self.config.get("network.retries", 3)),
            backoff_factor=float(self.config.get("network.backoff_factor", 0.5)),
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "HEAD"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.verify = certifi.where()

        session.headers.update({
            "User-Agent": self.config.get("network.user_agent"),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        })
        return session

    def load_url(self, url: str) -> Document:
        """
        Fetch and parse a document.

        The encoding is taken from the Content-Type header when it names
        one, otherwise it is detected from the content.

        Args:
            url: The URL to fetch

        Returns:
            The parsed document

        Raises:
            LoadError: If the request fails or returns an error status
            ParseError: If the response cannot be parsed
        """
        logger.debug(f"Fetching {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LoadError(f"Error loading {url}: {e}") from e

        match = _CHARSET_RE.search(response.headers.get("Content-Type", ""))
        encoding = match.group(1) if match else None
        logger.debug(f"Fetched {len(response.content)} bytes from {url} "
                     f"(status {response.status_code}, charset {encoding})")
        return parse(response.content, from_encoding=encoding, url=url)

    def load_file(self, path: str) -> Document:
        """
        Read and parse a document from a file.

        Raises:
            LoadError: If the file cannot be read
            ParseError: If the content cannot be parsed
        """
        try:
            with open(path, 'rb') as f:
                content = f.read()
        except OSError as e:
            raise LoadError(f"Error reading {path}: {e}") from e
        return parse(content, url=path)

    def load(self, source: str) -> Document:
        """Load a document from an http(s) URL or a file path."""
        if source.startswith(("http://", "https://")):
            return self.load_url(source)
        return self.load_file(source)


def load_url(url: str) -> Document:
    """
    Fetch and parse the document at a URL.

    Raises:
        LoadError: If the request fails
    """
    return DocumentLoader().load_url(url)


def load_doc(path: str) -> Document:
    """
    Read and parse a document from a file.

    Raises:
        LoadError: If the file cannot be read
    """
    return DocumentLoader().load_file(path)
