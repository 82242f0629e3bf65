"""Tests for the command line tool."""
import io
import os

import pytest

from htmlquery import __version__
from htmlquery.main import EXIT_BAD_EXPRESSION, EXIT_LOAD_ERROR, EXIT_OK, main
from htmlquery.utils.logging import get_default_log_file


@pytest.fixture
def sample_file(tmp_path, sample_html):
    path = tmp_path / "sample.html"
    path.write_text(sample_html, encoding="utf-8")
    return str(path)


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out.splitlines(), captured.err


class TestOutput:

    def test_attribute_nodes(self, capsys, sample_file):
        code, lines, _ = run(capsys, sample_file, "//a/@href")
        assert code == EXIT_OK
        assert lines == ["/London", "/Paris", "/Tokyo"]

    def test_first(self, capsys, sample_file):
        _, lines, _ = run(capsys, sample_file, "//li/a", "--first")
        assert lines == ["London"]

    def test_attr_option(self, capsys, sample_file):
        _, lines, _ = run(capsys, sample_file, "//a", "--attr", "href")
        assert lines == ["/London", "/Paris", "/Tokyo"]

    def test_css_html_output(self, capsys, sample_file):
        _, lines, _ = run(capsys, sample_file, "nav a", "--css", "--output", "html")
        assert lines == ['<a href="/London">London</a>',
                         '<a href="/Paris">Paris</a>',
                         '<a href="/Tokyo">Tokyo</a>']

    def test_inner_html_output(self, capsys, sample_file):
        _, lines, _ = run(capsys, sample_file, "//li[1]", "--output", "inner-html")
        assert lines == ['<a href="/London">London</a>']

    def test_scalar_result(self, capsys, sample_file):
        _, lines, _ = run(capsys, sample_file, "count(//a)")
        assert lines == ["3"]

    def test_no_cache(self, capsys, sample_file):
        code, lines, _ = run(capsys, sample_file, "//title", "--no-cache")
        assert code == EXIT_OK
        assert lines == ["Hello,World!"]

    def test_standard_input(self, capsys, monkeypatch):
        stdin = io.TextIOWrapper(io.BytesIO(b"<ul><li>a</li><li>b</li></ul>"))
        monkeypatch.setattr("sys.stdin", stdin)
        _, lines, _ = run(capsys, "-", "//li")
        assert lines == ["a", "b"]


class TestFailures:

    def test_missing_file(self, capsys, tmp_path):
        code, lines, err = run(capsys, str(tmp_path / "missing.html"), "//a")
        assert code == EXIT_LOAD_ERROR
        assert lines == []
        assert err.startswith("htmlquery: ")

    def test_bad_expression(self, capsys, sample_file):
        code, _, err = run(capsys, sample_file, "//a[")
        assert code == EXIT_BAD_EXPRESSION
        assert "//a[" in err

    def test_bad_selector(self, capsys, sample_file):
        code, _, _ = run(capsys, sample_file, "a[", "--css")
        assert code == EXIT_BAD_EXPRESSION

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            main(["--version"])
        assert __version__ in capsys.readouterr().out


class TestLogFile:

    def test_default_log_file_location(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        path = get_default_log_file()
        assert os.path.dirname(path) == str(tmp_path / ".htmlquery" / "logs")
        assert os.path.basename(path).startswith("htmlquery_")
        assert path.endswith(".log")

    def test_log_file_without_path(self, capsys, monkeypatch, tmp_path, sample_file):
        monkeypatch.setenv("HOME", str(tmp_path))
        code, lines, _ = run(capsys, sample_file, "//title", "--log-file")
        assert code == EXIT_OK
        assert lines == ["Hello,World!"]
        assert (tmp_path / ".htmlquery" / "logs").is_dir()
