"""Tests for the query executor."""
import threading

import pytest

from htmlquery import parse, xpath
from htmlquery.dom import Element
from htmlquery.exceptions import CompileError, FatalQueryError, QueryError
from htmlquery.query import executor as executor_module
from htmlquery.query import (ExpressionCache, QueryExecutor, get_default_executor,
                             set_default_executor)
from htmlquery.xpath.parser import XPathParser


class RepeatingExpression(xpath.Expression):
    """Expression whose results come back twice."""

    __slots__ = ()

    def select(self, navigator, variables=None):
        nodes = list(super().select(navigator, variables))
        return iter(nodes + nodes)


def repeating(text):
    return RepeatingExpression(text, XPathParser(text).parse())


@pytest.fixture
def executor():
    return QueryExecutor(ExpressionCache())


class TestQueryAll:

    def test_links(self, sample_doc, executor):
        links = executor.query_all(sample_doc, "//a")
        assert [link.inner_text for link in links] == ["London", "Paris", "Tokyo"]

    def test_attribute_results(self, sample_doc, executor):
        hrefs = executor.query_all(sample_doc, "//a/@href")
        assert [href.inner_text for href in hrefs] == ["/London", "/Paris", "/Tokyo"]
        assert all(isinstance(href, Element) and href.is_attribute for href in hrefs)
        assert all(href.tag_name == "href" for href in hrefs)

    def test_relative_to_node(self, sample_doc, executor):
        nav = executor.query(sample_doc, "//nav")
        assert len(executor.query_all(nav, ".//li")) == 3
        assert executor.query_all(nav, "h1") == []

    def test_text_nodes(self, list_doc, executor):
        texts = executor.query_all(list_doc, "//li/text()")
        assert [text.data for text in texts] == ["one", "two", "three"]

    def test_no_match(self, sample_doc, executor):
        assert executor.query_all(sample_doc, "//table") == []

    def test_precompiled_expression(self, sample_doc, executor):
        expression = xpath.compile("//li")
        assert len(executor.query_all(sample_doc, expression)) == 3
        assert len(executor.cache) == 0


class TestDeduplication:

    def test_parent_of_attribute(self, executor):
        doc = parse('<html><b attr="1"></b></html>')
        nodes = executor.query_all(doc, "//b/@attr/..")
        assert len(nodes) == 1
        assert nodes[0].tag_name == "b"

    def test_parent_of_attribute_find_one(self):
        doc = parse('<html><b attr="1"></b></html>')
        node = doc.find_one("//b/@attr/..")
        assert node is not None
        assert node.data == "b"

    def test_parents_of_several_attributes(self, executor):
        doc = parse('<html><b attr="1"></b><b attr="2"></b></html>')
        nodes = executor.query_all(doc, "//b/@attr/..")
        assert [node.tag_name for node in nodes] == ["b", "b"]
        assert nodes[0] is not nodes[1]

    def test_every_repeated_node_is_dropped(self, list_doc, executor):
        items = executor.query_all(list_doc, repeating("//li"))
        assert [item.inner_text for item in items] == ["one", "two", "three"]

    def test_repeated_attributes_are_dropped(self, list_doc, executor):
        ids = executor.query_all(list_doc, repeating("//p/@id"))
        assert [node.inner_text for node in ids] == ["p1", "p2"]

    def test_equal_attributes_of_different_elements_are_kept(self, executor):
        doc = parse('<html><b attr="1"></b><b attr="1"></b></html>')
        values = executor.query_all(doc, "//b/@attr")
        assert [value.inner_text for value in values] == ["1", "1"]


class TestQuery:

    def test_first_result(self, sample_doc, executor):
        assert executor.query(sample_doc, "//h1").inner_text == "City Gallery"

    def test_first_attribute(self, sample_doc, executor):
        assert executor.query(sample_doc, "//a[1]/@href").inner_text == "/London"

    def test_none(self, sample_doc, executor):
        assert executor.query(sample_doc, "//table") is None

    def test_stops_at_first_match(self, monkeypatch, executor, counting_navigator, long_list_html):
        doc = parse(long_list_html)
        monkeypatch.setattr(executor_module, "NodeNavigator", counting_navigator)

        first = executor.query(doc, "//li/a")
        assert first.parent_node.previous_sibling is None
        assert first.parent_node.tag_name == "li"
        assert counting_navigator.moves < 200

        counting_navigator.moves = 0
        assert len(executor.query_all(doc, "//li/a")) == 2000
        assert counting_navigator.moves > 2000


class TestErrors:

    def test_compile_error(self, sample_doc, executor):
        with pytest.raises(CompileError) as excinfo:
            executor.query_all(sample_doc, "//a[")
        assert excinfo.value.expression == "//a["

    def test_compile_error_is_query_error(self, sample_doc, executor):
        with pytest.raises(QueryError):
            executor.query(sample_doc, "//a[@href=]")

    def test_result_is_not_a_node_set(self, sample_doc, executor):
        with pytest.raises(QueryError) as excinfo:
            executor.query_all(sample_doc, "count(//a)")
        assert not isinstance(excinfo.value, CompileError)

    def test_unknown_variable(self, sample_doc, executor):
        with pytest.raises(QueryError):
            executor.query_all(sample_doc, "//a[$n]")

    def test_error_in_predicate_of_first_match(self, list_doc, executor):
        with pytest.raises(QueryError) as excinfo:
            executor.query(list_doc, "//li[matches(., '(')]")
        assert not isinstance(excinfo.value, CompileError)

    def test_find_raises_fatal_error(self, sample_doc, executor):
        with pytest.raises(FatalQueryError) as excinfo:
            executor.find(sample_doc, "//a[")
        assert not isinstance(excinfo.value, QueryError)
        assert isinstance(excinfo.value, RuntimeError)
        assert excinfo.value.expression == "//a["

    def test_find_one_raises_fatal_error(self, sample_doc, executor):
        with pytest.raises(FatalQueryError):
            executor.find_one(sample_doc, "1 +")

    def test_find_works_for_valid_expressions(self, sample_doc, executor):
        assert len(executor.find(sample_doc, "//p")) == 2
        assert executor.find_one(sample_doc, "//footer") is not None

    def test_failed_compile_can_be_retried(self, sample_doc, executor):
        with pytest.raises(CompileError):
            executor.query_all(sample_doc, "//a[")
        assert len(executor.query_all(sample_doc, "//a[1]")) == 3


class TestEvaluate:

    def test_number(self, sample_doc, executor):
        assert executor.evaluate(sample_doc, "count(//a)") == 3.0

    def test_string(self, sample_doc, executor):
        assert executor.evaluate(sample_doc, "string(//title)") == "Hello,World!"

    def test_boolean(self, sample_doc, executor):
        assert executor.evaluate(sample_doc, "boolean(//nav)") is True

    def test_node_set(self, sample_doc, executor):
        nodes = executor.evaluate(sample_doc, "//a/@href")
        assert [node.inner_text for node in nodes] == ["/London", "/Paris", "/Tokyo"]

    def test_variables(self, list_doc, executor):
        nodes = executor.evaluate(list_doc, "//li[$n]", {"n": 2})
        assert [node.inner_text for node in nodes] == ["two"]


class TestNodeMethods:

    def test_delegate_to_default_executor(self, sample_doc):
        executor = get_default_executor()
        sample_doc.query_all("//a")
        assert "//a" in executor.cache

    def test_set_default_executor(self, sample_doc):
        executor = QueryExecutor(ExpressionCache(enabled=False))
        set_default_executor(executor)
        assert get_default_executor() is executor
        assert len(sample_doc.find("//li")) == 3
        assert len(executor.cache) == 0
        assert executor.cache.misses == 1

    def test_query_and_query_all(self, sample_doc):
        assert sample_doc.query("//title").inner_text == "Hello,World!"
        assert len(sample_doc.query_all("//h1")) == 2

    def test_find_on_node(self, sample_doc):
        with pytest.raises(FatalQueryError):
            sample_doc.find("//")


class TestConcurrency:

    def test_parallel_queries_share_tree_and_cache(self, sample_doc, executor):
        errors = []
        results = []

        def worker(index):
            try:
                for _ in range(20):
                    expression = f"//li[{index % 3 + 1}]/a/@href"
                    results.append(executor.query(sample_doc, expression).inner_text)
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(results) == 160
        assert set(results) == {"/London", "/Paris", "/Tokyo"}
        assert len(executor.cache) == 3
