#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/converter.py
"""Conversion of parsed nodes into output nodes.

The converter walks the parsed tree depth first. Every element receives the
current value of an identifier counter when it is first visited, which is
then incremented and handed on to the next node converted, so identifiers
form a single increasing sequence across the whole tree in document order.

The counter is passed in and returned explicitly. It lives only as long as
the call that started it; nothing is kept between conversions. The walk uses
an explicit stack, so nesting depth is not limited by the interpreter's
recursion limit.

Examples
--------
    >>> from html_injector.parser import ParsedElement, ParsedText
    >>> tree = ParsedElement("P", (("class", "lead"),), (ParsedText("Hi"),))
    >>> node, counter = convert_node(tree, 0)
    >>> node.tag, dict(node.props), node.key, counter
    ('p', {'className': 'lead'}, 0, 1)

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from html_injector.ast.nodes import ElementNode, OutputNode, TextLeaf
from html_injector.attributes import map_attributes
from html_injector.parser import ParsedElement, ParsedText

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


class _Frame:
    """An element whose children are still being converted."""

    __slots__ = ("element", "key", "pending", "converted")

    def __init__(self, element: ParsedElement, key: int):
        self.element = element
        self.key = key
        self.pending: Iterator[object] = iter(element.children)
        self.converted: list[OutputNode] = []

    def build(self) -> ElementNode:
        return ElementNode(
            tag=self.element.tag.lower(),
            props=map_attributes(self.element.attributes),
            children=tuple(self.converted),
            key=self.key,
        )


def convert_node(node: object, counter: int = 0) -> tuple[OutputNode | None, int]:
    """Convert one parsed node and its descendants.

    Parameters
    ----------
    node : ParsedText or ParsedElement
        Parsed node to convert. Any other value converts to None.
    counter : int, default 0
        Identifier for the next element

    Returns
    -------
    tuple[OutputNode or None, int]
        The converted node and the counter value for the next element

    """
    if isinstance(node, ParsedText):
        return TextLeaf(node.content), counter

    if not isinstance(node, ParsedElement):
        if node is not None:
            logger.debug("Skipping unsupported node of type %s", type(node).__name__)
        return None, counter

    stack = [_Frame(node, counter)]
    counter += 1
    while True:
        frame = stack[-1]
        child = next(frame.pending, _EXHAUSTED)

        if child is _EXHAUSTED:
            stack.pop()
            element = frame.build()
            if not stack:
                return element, counter
            stack[-1].converted.append(element)
        elif isinstance(child, ParsedElement):
            stack.append(_Frame(child, counter))
            counter += 1
        elif isinstance(child, ParsedText):
            frame.converted.append(TextLeaf(child.content))
        elif child is not None:
            logger.debug("Skipping unsupported node of type %s", type(child).__name__)


def convert_nodes(nodes: Iterable[object], counter: int = 0) -> tuple[tuple[OutputNode, ...], int]:
    """Convert a sequence of sibling nodes, threading the counter through them.

    Parameters
    ----------
    nodes : iterable of ParsedNode
        Sibling nodes in document order
    counter : int, default 0
        Identifier for the first element

    Returns
    -------
    tuple[tuple of OutputNode, int]
        Converted nodes (unsupported nodes dropped) and the next counter value

    """
    converted: list[OutputNode] = []
    for node in nodes:
        output, counter = convert_node(node, counter)
        if output is not None:
            converted.append(output)
    return tuple(converted), counter


__all__ = ["convert_node", "convert_nodes"]
