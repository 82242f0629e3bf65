"""Tests for CSS selector queries."""
import pytest

from htmlquery.exceptions import CompileError
from htmlquery.query import css_to_xpath


def texts(nodes):
    return [node.inner_text for node in nodes]


class TestSelectors:

    def test_class(self, list_doc):
        assert texts(list_doc.query_selector_all("li.x")) == ["one", "three"]

    def test_id(self, list_doc):
        assert list_doc.query_selector("#p2").inner_text == "4"

    def test_attribute_prefix(self, list_doc):
        assert texts(list_doc.query_selector_all('p[id^="p"]')) == ["3", "4"]

    def test_structural(self, list_doc):
        assert texts(list_doc.query_selector_all("ul > li:nth-child(2)")) == ["two"]
        assert texts(list_doc.query_selector_all("li:first-child")) == ["one"]

    def test_scoped_to_node(self, sample_doc):
        article = sample_doc.query_selector("article")
        assert texts(article.query_selector_all("h1")) == ["London"]

    def test_no_match(self, list_doc):
        assert list_doc.query_selector("table") is None
        assert list_doc.query_selector_all("table") == []

    def test_same_nodes_as_xpath(self, sample_doc):
        by_css = sample_doc.query_selector_all("nav a")
        by_xpath = sample_doc.find("//nav//a")
        assert len(by_css) == 3
        assert all(a is b for a, b in zip(by_css, by_xpath))


class TestTranslation:

    def test_returns_expression_text(self):
        expression = css_to_xpath("li.x")
        assert isinstance(expression, str)
        assert "li" in expression

    def test_invalid_selector(self, list_doc):
        with pytest.raises(CompileError) as excinfo:
            list_doc.query_selector_all("li[")
        assert excinfo.value.expression == "li["
