#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/renderers/html.py
"""HTML rendering from output node trees.

This module turns a converted tree back into markup. It is meant for
previews and debugging: the tree it renders has already been sanitized, and
the renderer only escapes text and attribute values on the way out.

Property names are mapped back to their markup names (``className`` becomes
``class``) and the style mapping is written as kebab-case declarations.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from html import escape
from typing import Union

from html_injector.ast.nodes import ElementNode, OutputNode, TextLeaf
from html_injector.ast.visitors import NodeVisitor
from html_injector.constants import CLASS_ATTRIBUTE, CLASS_NAME_PROPERTY, STYLE_ATTRIBUTE, VOID_ELEMENTS

logger = logging.getLogger(__name__)

_CAMEL_HUMP_RE = re.compile(r"([A-Z])")


def to_kebab_case(name: str) -> str:
    """Convert a camelCase CSS property name to kebab-case.

    Examples
    --------
    >>> to_kebab_case("backgroundColor")
    'background-color'
    >>> to_kebab_case("color")
    'color'

    """
    return _CAMEL_HUMP_RE.sub(lambda match: "-" + match.group(1).lower(), name)


def format_style(style: Mapping[str, str]) -> str:
    """Write a style mapping as CSS declarations.

    Examples
    --------
    >>> format_style({"fontSize": "16px", "color": "red"})
    'font-size: 16px; color: red'

    """
    return "; ".join(f"{to_kebab_case(name)}: {value}" for name, value in style.items())


class HtmlRenderer(NodeVisitor):
    """Render output nodes to an HTML string.

    Examples
    --------
    >>> from html_injector.ast.nodes import ElementNode, TextLeaf
    >>> node = ElementNode("p", {"className": "lead"}, (TextLeaf("a < b"),))
    >>> HtmlRenderer().render_to_string(node)
    '<p class="lead">a &lt; b</p>'

    """

    def __init__(self) -> None:
        self._output: list[str] = []

    def render_to_string(self, node: OutputNode) -> str:
        """Render a node and its descendants.

        Parameters
        ----------
        node : OutputNode
            Root of the tree to render

        Returns
        -------
        str
            Rendered markup

        """
        self._output = []
        node.accept(self)
        return "".join(self._output)

    def visit_text(self, node: TextLeaf) -> None:
        self._output.append(escape(node.content, quote=False))

    def visit_element(self, node: ElementNode) -> None:
        # Pending closing tags and nodes, popped from the end
        pending: list[Union[str, OutputNode]] = [node]
        while pending:
            current = pending.pop()
            if isinstance(current, str):
                self._output.append(current)
            elif isinstance(current, ElementNode):
                pending.extend(self._open_element(current))
            else:
                current.accept(self)

    def _open_element(self, node: ElementNode) -> list[Union[str, OutputNode]]:
        """Write the opening tag and return what remains to render, in stack order."""
        self._output.append(f"<{node.tag}{self._render_props(node.props)}>")
        if node.tag in VOID_ELEMENTS:
            if node.children:
                logger.debug("Void element <%s> rendered without its %d children", node.tag, len(node.children))
            return []
        return [f"</{node.tag}>", *reversed(node.children)]

    @staticmethod
    def _render_props(props: Mapping[str, object]) -> str:
        parts = []
        for name, value in props.items():
            if name == STYLE_ATTRIBUTE and isinstance(value, Mapping):
                if not value:
                    continue
                value = format_style(value)
            elif name == CLASS_NAME_PROPERTY:
                name = CLASS_ATTRIBUTE
            parts.append(f' {name}="{escape(str(value), quote=True)}"')
        return "".join(parts)


def render_html(node: OutputNode | None) -> str:
    """Render an output tree as markup; None renders as an empty string."""
    if node is None:
        return ""
    return HtmlRenderer().render_to_string(node)


__all__ = ["HtmlRenderer", "format_style", "render_html", "to_kebab_case"]
