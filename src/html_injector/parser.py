#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/parser.py
"""Markup parsing into a tagged parsed-node tree.

BeautifulSoup does the actual parsing; with the default ``html5lib`` tree
builder malformed markup is repaired exactly as a browser would repair it
(implicit closing, reparenting of misnested elements, and so on). The
resulting soup is copied into two small immutable types so the converter
never has to inspect BeautifulSoup classes:

- ParsedText: a text node
- ParsedElement: a tag with ordered attributes and ordered children

Comments, doctypes, CDATA sections, declarations and processing
instructions are not part of the parsed tree.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Union

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag
from bs4.exceptions import FeatureNotFound

from html_injector.constants import DEFAULT_HTML_PARSER, HTML_PARSER_PACKAGES, HtmlParser
from html_injector.exceptions import DependencyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedText:
    """Text node produced by the parser."""

    content: str


@dataclass(frozen=True)
class ParsedElement:
    """Element node produced by the parser.

    Parameters
    ----------
    tag : str
        Tag name as reported by the tree builder
    attributes : tuple of (name, value) pairs
        Attributes in source order
    children : tuple of ParsedNode
        Child nodes in document order

    """

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple["ParsedNode", ...] = ()


ParsedNode = Union[ParsedText, ParsedElement]


def make_soup(markup: str, parser: HtmlParser = DEFAULT_HTML_PARSER) -> BeautifulSoup:
    """Parse markup with BeautifulSoup, keeping attribute values as strings.

    Parameters
    ----------
    markup : str
        Markup to parse
    parser : {"html5lib", "html.parser", "lxml"}, default "html5lib"
        Tree builder to use

    Returns
    -------
    BeautifulSoup
        Parsed document

    Raises
    ------
    DependencyError
        If the selected tree builder is not installed

    """
    try:
        return BeautifulSoup(markup, parser, multi_valued_attributes=None)
    except FeatureNotFound as e:
        package = HTML_PARSER_PACKAGES.get(parser, "")
        raise DependencyError(
            "parser",
            missing_packages=[(package, "")] if package else [],
            message=f"HTML parser {parser!r} is not available: {e}",
            original_error=e,
        ) from e


def content_root(soup: BeautifulSoup) -> Tag:
    """Return the element whose children are the document's top-level nodes.

    Tree builders that synthesize a document (html5lib, lxml) put content in
    ``<body>``; ``html.parser`` keeps it at the root.
    """
    body = soup.find("body")
    return body if isinstance(body, Tag) else soup


def _attribute_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    # multi-valued attribute from a builder that ignored multi_valued_attributes
    return " ".join(str(part) for part in value)


def _to_parsed_leaf(node: Any) -> ParsedText | None:
    if isinstance(node, PreformattedString):
        return None
    if isinstance(node, NavigableString):
        return ParsedText(str(node))
    return None


def _to_parsed_element(tag: Tag, children: list[ParsedNode]) -> ParsedElement:
    attributes = tuple((name, _attribute_value(value)) for name, value in tag.attrs.items())
    return ParsedElement(tag=tag.name, attributes=attributes, children=tuple(children))


def to_parsed_node(node: Any) -> ParsedNode | None:
    """Convert a BeautifulSoup node to a parsed node.

    The tree is walked with an explicit stack, so nesting depth is bounded
    only by memory.

    Returns None for comments, doctypes, CDATA, declarations, processing
    instructions and anything else that is neither text nor a tag.
    """
    if not isinstance(node, Tag):
        return _to_parsed_leaf(node)

    # (tag, remaining children, converted children)
    stack: list[tuple[Tag, Iterator[Any], list[ParsedNode]]] = [(node, iter(node.children), [])]
    while stack:
        tag, pending, converted = stack[-1]
        child = next(pending, None)

        if child is None:
            stack.pop()
            element = _to_parsed_element(tag, converted)
            if not stack:
                return element
            stack[-1][2].append(element)
        elif isinstance(child, Tag):
            stack.append((child, iter(child.children), []))
        else:
            leaf = _to_parsed_leaf(child)
            if leaf is not None:
                converted.append(leaf)

    return None


def parse_html(markup: str, parser: HtmlParser = DEFAULT_HTML_PARSER) -> tuple[ParsedNode, ...]:
    """Parse markup into its top-level parsed nodes.

    Parameters
    ----------
    markup : str
        Markup to parse; never rejected for being malformed
    parser : {"html5lib", "html.parser", "lxml"}, default "html5lib"
        BeautifulSoup tree builder

    Returns
    -------
    tuple of ParsedNode
        Top-level text and element nodes in document order

    Raises
    ------
    DependencyError
        If the selected tree builder is not installed

    """
    soup = make_soup(markup, parser)
    root = content_root(soup)
    nodes = tuple(parsed for parsed in (to_parsed_node(child) for child in root.children) if parsed is not None)
    logger.debug("Parsed %d top-level nodes with %s", len(nodes), parser)
    return nodes


__all__ = ["ParsedElement", "ParsedNode", "ParsedText", "content_root", "make_soup", "parse_html"]
