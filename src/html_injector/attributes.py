#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/attributes.py
"""Mapping of markup attributes to output properties.

Each attribute is mapped on its own:

- ``class`` becomes ``className``
- ``style`` becomes a camelCase property mapping
- event handler attributes (``on`` followed by a lowercase letter) are dropped
- every other attribute passes through unchanged

Dropping handlers here does not replace sanitization. It guarantees that no
handler reaches the output even when the sanitizer was disabled or let one
through.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from html_injector.ast.nodes import PropValue
from html_injector.constants import (
    CLASS_ATTRIBUTE,
    CLASS_NAME_PROPERTY,
    HANDLER_ATTRIBUTE_RE,
    STYLE_ATTRIBUTE,
)
from html_injector.styles import parse_style

logger = logging.getLogger(__name__)


def is_handler_attribute(name: str) -> bool:
    """Check whether an attribute name binds an event handler.

    Examples
    --------
    >>> is_handler_attribute("onclick")
    True
    >>> is_handler_attribute("one-time")
    True
    >>> is_handler_attribute("on")
    False
    >>> is_handler_attribute("data-on-click")
    False

    """
    return HANDLER_ATTRIBUTE_RE.match(name) is not None


def map_attribute(name: str, value: str) -> tuple[str, PropValue] | None:
    """Map one markup attribute to an output property.

    Parameters
    ----------
    name : str
        Attribute name as produced by the parser
    value : str
        Attribute value

    Returns
    -------
    tuple[str, str | dict[str, str]] or None
        ``(property_name, property_value)``, or None when the attribute is
        dropped

    """
    if name == CLASS_ATTRIBUTE:
        return CLASS_NAME_PROPERTY, value
    if name == STYLE_ATTRIBUTE:
        return STYLE_ATTRIBUTE, parse_style(value)
    if is_handler_attribute(name):
        logger.debug("Dropping event handler attribute: %s", name)
        return None
    return name, value


def map_attributes(attributes: Iterable[tuple[str, str]]) -> dict[str, PropValue]:
    """Map attributes in order into a property dictionary.

    Properties appear in the order of their source attributes. If two
    attributes map to the same property, the first position is kept and the
    last value wins.

    Parameters
    ----------
    attributes : iterable of (name, value) pairs
        Attributes in source order

    Returns
    -------
    dict[str, str | dict[str, str]]
        Output properties

    """
    props: dict[str, PropValue] = {}
    for name, value in attributes:
        mapped = map_attribute(name, value)
        if mapped is None:
            continue
        prop_name, prop_value = mapped
        props[prop_name] = prop_value
    return props


__all__ = ["is_handler_attribute", "map_attribute", "map_attributes"]
