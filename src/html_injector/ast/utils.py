#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/ast/utils.py
"""Inspection helpers for output node trees."""

from __future__ import annotations

from collections.abc import Iterator

from html_injector.ast.nodes import ElementNode, OutputNode
from html_injector.ast.visitors import TextCollector


def text_content(node: OutputNode) -> str:
    """Return the concatenated text of ``node`` and its descendants.

    Examples
    --------
    >>> from html_injector.ast import ElementNode, TextLeaf
    >>> text_content(ElementNode("p", children=(TextLeaf("Hello "), ElementNode("b", children=(TextLeaf("World"),)))))
    'Hello World'

    """
    collector = TextCollector()
    node.accept(collector)
    return collector.text


def iter_elements(node: OutputNode) -> Iterator[ElementNode]:
    """Yield every element of the tree in pre-order, depth first."""
    stack: list[OutputNode] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, ElementNode):
            yield current
            stack.extend(reversed(current.children))


def collect_keys(node: OutputNode) -> list[int]:
    """Return element identifiers in pre-order."""
    return [element.key for element in iter_elements(node)]


def find_all(node: OutputNode, tag: str) -> list[ElementNode]:
    """Return every element with the given tag name, in pre-order."""
    tag = tag.lower()
    return [element for element in iter_elements(node) if element.tag == tag]


def find_first(node: OutputNode, tag: str) -> ElementNode | None:
    """Return the first element with the given tag name, or None."""
    tag = tag.lower()
    return next((element for element in iter_elements(node) if element.tag == tag), None)


__all__ = ["collect_keys", "find_all", "find_first", "iter_elements", "text_content"]
