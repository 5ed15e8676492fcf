#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/ast/nodes.py
"""Output node classes for sanitized markup trees.

This module defines the node model handed to a rendering layer after
conversion. The model is a tagged variant with two members:

    - TextLeaf: a literal string, no children and no identifier
    - ElementNode: a lowercased tag, an ordered property mapping, ordered
      children and an identifier unique within one conversion call

Property mappings follow the naming a component renderer expects: ``class``
is exposed as ``className`` and ``style`` is a mapping of camelCase CSS
property names to values, never a raw string.

Nodes are frozen once built. Property and style mappings are exposed as
read-only views so a returned tree cannot be mutated by its consumer.

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from html_injector.constants import CLASS_NAME_PROPERTY, STYLE_ATTRIBUTE

StyleMap = Mapping[str, str]
PropValue = Union[str, StyleMap]
PropertyMap = Mapping[str, PropValue]

_EMPTY_STYLE: StyleMap = MappingProxyType({})


def freeze_props(props: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> PropertyMap:
    """Build a read-only ordered property mapping.

    Insertion order follows the input order. When a name occurs more than
    once the first position is kept and the last value wins. Mapping values
    (the style property) are frozen as well.

    Parameters
    ----------
    props : Mapping or iterable of (name, value) pairs, optional
        Property source

    Returns
    -------
    Mapping[str, str | Mapping[str, str]]
        Read-only view over the collected properties

    """
    collected: dict[str, PropValue] = {}
    if props is None:
        return MappingProxyType(collected)
    items = props.items() if isinstance(props, Mapping) else props
    for name, value in items:
        if isinstance(value, Mapping):
            value = MappingProxyType(dict(value))
        collected[name] = value
    return MappingProxyType(collected)


@dataclass(frozen=True)
class TextLeaf:
    """Literal text content.

    Parameters
    ----------
    content : str
        Text exactly as the parser produced it (no trimming, no re-encoding)

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text leaf.

        Parameters
        ----------
        visitor : Any
            A visitor object with a visit_text method

        Returns
        -------
        Any
            Result from visitor.visit_text(self)

        """
        return visitor.visit_text(self)


@dataclass(frozen=True)
class ElementNode:
    """Element with normalized properties and converted children.

    Parameters
    ----------
    tag : str
        Lowercased tag name
    props : Mapping[str, str | Mapping[str, str]], default empty
        Ordered output properties. ``style`` holds a mapping of camelCase
        property names to values; every other value is a string.
    children : tuple of OutputNode, default empty
        Converted child nodes in document order
    key : int, default 0
        Identifier unique among all elements built by one conversion call

    """

    tag: str
    props: PropertyMap = field(default_factory=dict)
    children: tuple["OutputNode", ...] = ()
    key: int = 0

    def __post_init__(self) -> None:
        """Lowercase the tag and freeze props and children."""
        object.__setattr__(self, "tag", self.tag.lower())
        object.__setattr__(self, "props", freeze_props(self.props))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def style(self) -> StyleMap:
        """Return the style mapping, empty when the element has none."""
        style = self.props.get(STYLE_ATTRIBUTE)
        if isinstance(style, Mapping):
            return style
        return _EMPTY_STYLE

    @property
    def class_name(self) -> str | None:
        """Return the ``className`` property, if present."""
        value = self.props.get(CLASS_NAME_PROPERTY)
        return value if isinstance(value, str) else None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this element.

        Parameters
        ----------
        visitor : Any
            A visitor object with a visit_element method

        Returns
        -------
        Any
            Result from visitor.visit_element(self)

        """
        return visitor.visit_element(self)


OutputNode = Union[TextLeaf, ElementNode]


__all__ = [
    "ElementNode",
    "OutputNode",
    "PropValue",
    "PropertyMap",
    "StyleMap",
    "TextLeaf",
    "freeze_props",
]
