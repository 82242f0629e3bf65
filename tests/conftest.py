"""
Project-level pytest configuration helpers.
This conftest puts the project root on sys.path so tests import the
working tree, and provides the shared sample document.
"""
import os
import sys

import pytest

HERE = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(HERE, ".."))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from htmlquery import parse  # noqa: E402
from htmlquery.dom import NodeNavigator  # noqa: E402
from htmlquery.query import ExpressionCache, QueryExecutor, set_default_executor  # noqa: E402

SAMPLE_HTML = """<!DOCTYPE html><html lang="en-US">
<head>
<title>Hello,World!</title>
</head>
<body>
<div class="container">
<header>
\t<!-- Logo -->
   <h1>City Gallery</h1>
</header>
<nav>
  <ul>
    <li><a href="/London">London</a></li>
    <li><a href="/Paris">Paris</a></li>
    <li><a href="/Tokyo">Tokyo</a></li>
  </ul>
</nav>
<article>
  <h1>London</h1>
  <img src="pic_mountain.jpg" alt="Mountain View" style="width:304px;height:228px;">
  <p>London is the capital city of England. It is the most populous city in the  United Kingdom, with a metropolitan area of over 13 million inhabitants.</p>
  <p>Standing on the River Thames, London has been a major settlement for two millennia, its history going back to its founding by the Romans, who named it Londinium.</p>
</article>
<footer>Copyright &copy; W3Schools.com</footer>
</div>
</body>
</html>
"""

LIST_HTML = ("<html><body><ul><li class='x'>one</li><li>two</li><li class='x'>three</li></ul>"
             "<p id='p1'>3</p><p id='p2'>4</p></body></html>")


@pytest.fixture(autouse=True)
def fresh_default_executor():
    """Give every test its own default executor and expression cache."""
    set_default_executor(QueryExecutor(ExpressionCache()))
    yield


@pytest.fixture(scope="session")
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def sample_doc():
    """The City Gallery sample page, parsed."""
    return parse(SAMPLE_HTML)


@pytest.fixture
def list_doc():
    """A small page without whitespace: a list of three items and two paragraphs."""
    return parse(LIST_HTML)


class CountingNavigator(NodeNavigator):
    """Navigator that counts the moves made by it and all of its copies."""

    __slots__ = ()

    moves = 0

    def copy(self):
        return CountingNavigator(self.root, self.current, self.attribute_index)

    def move_to_root(self):
        CountingNavigator.moves += 1
        return super().move_to_root()

    def move_to_parent(self):
        CountingNavigator.moves += 1
        return super().move_to_parent()

    def move_to_child(self):
        CountingNavigator.moves += 1
        return super().move_to_child()

    def move_to_first(self):
        CountingNavigator.moves += 1
        return super().move_to_first()

    def move_to_next(self):
        CountingNavigator.moves += 1
        return super().move_to_next()

    def move_to_previous(self):
        CountingNavigator.moves += 1
        return super().move_to_previous()

    def move_to_next_attribute(self):
        CountingNavigator.moves += 1
        return super().move_to_next_attribute()


@pytest.fixture
def counting_navigator():
    """The counting navigator class, with its move counter reset."""
    CountingNavigator.moves = 0
    return CountingNavigator


@pytest.fixture(scope="session")
def long_list_html():
    """A flat list of 2000 linked items."""
    return "<ul>" + "<li><a>x</a></li>" * 2000 + "</ul>"
