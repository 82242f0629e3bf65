"""Tests for loading documents from URLs and files."""
from unittest.mock import MagicMock

import certifi
import pytest
import requests

from htmlquery.exceptions import LoadError
from htmlquery.network import DocumentLoader, load_doc
from htmlquery.utils.config import Config


def make_response(content, content_type="text/html; charset=utf-8", status_code=200):
    response = MagicMock()
    response.content = content
    response.status_code = status_code
    response.headers = {"Content-Type": content_type}
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


class TestLoadURL:

    def test_fetches_and_parses(self, session, sample_html):
        session.get.return_value = make_response(sample_html.encode("utf-8"))
        loader = DocumentLoader(session=session)

        doc = loader.load_url("http://example.com/gallery")

        session.get.assert_called_once_with("http://example.com/gallery", timeout=30)
        assert doc.url == "http://example.com/gallery"
        assert [a.inner_text for a in doc.find("//a")] == ["London", "Paris", "Tokyo"]

    def test_charset_from_header(self, session):
        session.get.return_value = make_response("<p>café</p>".encode("latin-1"),
                                                 "text/html; charset=ISO-8859-1")
        doc = DocumentLoader(session=session).load_url("http://example.com/")
        assert doc.find_one("//p").inner_text == "café"

    def test_configured_timeout(self, session):
        config = Config()
        config.set("network.timeout", 5)
        session.get.return_value = make_response(b"<p></p>")
        DocumentLoader(config, session).load_url("http://example.com/")
        session.get.assert_called_once_with("http://example.com/", timeout=5)

    def test_connection_error(self, session):
        session.get.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(LoadError) as excinfo:
            DocumentLoader(session=session).load_url("http://example.com/")
        assert "connection refused" in str(excinfo.value)

    def test_error_status(self, session):
        response = make_response(b"not found", status_code=404)
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        session.get.return_value = response
        with pytest.raises(LoadError):
            DocumentLoader(session=session).load_url("http://example.com/missing")


class TestSession:

    def test_default_session(self):
        session = DocumentLoader().session
        assert session.headers["User-Agent"].startswith("htmlquery/")
        assert session.verify == certifi.where()
        retries = session.get_adapter("https://example.com/").max_retries
        assert retries.total == 3
        assert retries.backoff_factor == 0.5

    def test_configured_retries(self):
        config = Config()
        config.set("network.retries", 1)
        config.set("network.user_agent", "tests/1.0")
        session = DocumentLoader(config).session
        assert session.get_adapter("http://example.com/").max_retries.total == 1
        assert session.headers["User-Agent"] == "tests/1.0"


class TestLoadFile:

    def test_load_doc(self, tmp_path, sample_html):
        path = tmp_path / "sample.html"
        path.write_text(sample_html, encoding="utf-8")
        doc = load_doc(str(path))
        assert doc.url == str(path)
        assert doc.find_one("//h1").inner_text == "City Gallery"

    def test_missing_file(self, tmp_path):
        with pytest.raises(LoadError):
            load_doc(str(tmp_path / "missing.html"))

    def test_load_dispatches_on_scheme(self, session, tmp_path):
        path = tmp_path / "page.html"
        path.write_bytes(b"<title>file</title>")
        session.get.return_value = make_response(b"<title>web</title>")
        loader = DocumentLoader(session=session)

        assert loader.load(str(path)).title == "file"
        assert loader.load("https://example.com/").title == "web"
        session.get.assert_called_once()
