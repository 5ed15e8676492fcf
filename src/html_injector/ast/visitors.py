#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/ast/visitors.py
"""Visitor pattern base classes for output node traversal.

Visitors separate tree consumers (serializers, renderers, inspection helpers)
from the node classes themselves. Each node's ``accept`` method dispatches to
the matching ``visit_*`` method.

Examples
--------
Count the elements of a tree:

    >>> class ElementCounter(NodeVisitor):
    ...     def __init__(self):
    ...         self.count = 0
    ...     def visit_text(self, node):
    ...         pass
    ...     def visit_element(self, node):
    ...         self.count += 1
    ...         self.visit_children(node)

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from html_injector.ast.nodes import ElementNode, OutputNode, TextLeaf


class NodeVisitor(ABC):
    """Abstract base class for output node visitors."""

    @abstractmethod
    def visit_text(self, node: TextLeaf) -> Any:
        """Visit a text leaf.

        Parameters
        ----------
        node : TextLeaf
            Text leaf to visit

        Returns
        -------
        Any
            Visitor-specific result

        """

    @abstractmethod
    def visit_element(self, node: ElementNode) -> Any:
        """Visit an element node.

        Parameters
        ----------
        node : ElementNode
            Element to visit

        Returns
        -------
        Any
            Visitor-specific result

        """

    def visit_children(self, node: ElementNode) -> list[Any]:
        """Visit every child of ``node`` in order and collect the results."""
        return [child.accept(self) for child in node.children]


class TextCollector(NodeVisitor):
    """Collect the text content of a tree in document order."""

    def __init__(self) -> None:
        self.parts: list[str] = []

    def visit_text(self, node: TextLeaf) -> None:
        self.parts.append(node.content)

    def visit_element(self, node: ElementNode) -> None:
        # Iterative walk, nesting depth is bounded only by memory
        stack: list[OutputNode] = list(reversed(node.children))
        while stack:
            current = stack.pop()
            if isinstance(current, ElementNode):
                stack.extend(reversed(current.children))
            else:
                current.accept(self)

    @property
    def text(self) -> str:
        return "".join(self.parts)


__all__ = ["NodeVisitor", "TextCollector"]
