"""Tests for building document trees from markup."""
import io

import pytest

from htmlquery import parse
from htmlquery.dom import Comment, Document, DocumentType, Element, NodeType, Text
from htmlquery.exceptions import ParseError
from htmlquery.parser import HTMLParser


class TestTreeShape:

    def test_document_structure(self, sample_doc):
        assert isinstance(sample_doc, Document)
        kinds = [child.node_type for child in sample_doc.child_nodes]
        assert kinds == [NodeType.DOCUMENT_TYPE_NODE, NodeType.ELEMENT_NODE]

    def test_whitespace_text_is_kept(self, sample_doc):
        html = sample_doc.document_element
        assert [child.node_type for child in html.child_nodes] == [
            NodeType.ELEMENT_NODE, NodeType.TEXT_NODE, NodeType.ELEMENT_NODE]
        assert isinstance(html.child_nodes[1], Text)
        assert html.child_nodes[1].is_whitespace

    def test_comments_are_kept(self, sample_doc):
        header = sample_doc.find_one("//header")
        comments = [child for child in header.child_nodes if isinstance(child, Comment)]
        assert [comment.data for comment in comments] == [" Logo "]

    def test_implied_elements(self):
        doc = parse("<p>x</p>")
        assert [element.tag_name for element in doc.find("/html/*")] == ["head", "body"]
        assert doc.doctype is None

    def test_elements_and_attributes(self):
        doc = parse('<div id="main" class="a b"><span>x</span></div>')
        div = doc.find_one("//div")
        assert isinstance(div, Element)
        assert [(attr.key, attr.value) for attr in div.attributes] == [("id", "main"), ("class", "a b")]
        assert all(attr.owner_element is div for attr in div.attributes)


class TestDoctype:

    def test_html5(self, sample_doc):
        doctype = sample_doc.doctype
        assert isinstance(doctype, DocumentType)
        assert doctype.name == "html"
        assert doctype.public_id == ""
        assert doctype.system_id == ""

    def test_public_and_system_ids(self):
        doc = parse('<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Strict//EN" '
                    '"http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd"><html></html>')
        assert doc.doctype.public_id == "-//W3C//DTD XHTML 1.0 Strict//EN"
        assert doc.doctype.system_id == "http://www.w3.org/TR/xhtml1/DTD/xhtml1-strict.dtd"


class TestInput:

    def test_bytes_with_encoding(self):
        doc = parse("<p>café</p>".encode("latin-1"), from_encoding="latin-1")
        assert doc.find_one("//p").inner_text == "café"

    def test_utf8_bytes(self):
        doc = parse('<meta charset="utf-8"><p>你好</p>'.encode("utf-8"))
        assert doc.find_one("//p").inner_text == "你好"

    def test_file_object(self, sample_html):
        doc = parse(io.StringIO(sample_html))
        assert len(doc.find("//a")) == 3

    def test_binary_file_object(self, sample_html):
        doc = parse(io.BytesIO(sample_html.encode("utf-8")))
        assert doc.title == "Hello,World!"

    def test_url_is_kept(self):
        doc = HTMLParser().parse("<p></p>", url="https://example.com/")
        assert doc.url == "https://example.com/"

    def test_empty_markup(self):
        doc = parse("")
        assert doc.find_one("//body") is not None

    def test_unsupported_input(self):
        with pytest.raises(ParseError):
            parse(42)
