#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/styles.py
"""Inline style parsing.

Turns the value of a ``style`` attribute into an ordered mapping of camelCase
property names to values, the shape component renderers expect.

Parsing is lenient: empty declarations, declarations without a colon and
declarations with an empty name or value are dropped without affecting the
declarations around them.
"""

from __future__ import annotations

import logging

from html_injector.constants import KEBAB_SEGMENT_RE, STYLE_DECLARATION_SEPARATOR, STYLE_PROPERTY_SEPARATOR

logger = logging.getLogger(__name__)


def to_camel_case(name: str) -> str:
    """Convert a kebab-case CSS property name to camelCase.

    Each lowercase letter that directly follows a hyphen is uppercased and the
    hyphen removed. Hyphens not followed by a lowercase letter are kept.

    Examples
    --------
    >>> to_camel_case("background-color")
    'backgroundColor'
    >>> to_camel_case("color")
    'color'
    >>> to_camel_case("-webkit-transition")
    'WebkitTransition'

    """
    return KEBAB_SEGMENT_RE.sub(lambda match: match.group(1).upper(), name)


def parse_style(style: str) -> dict[str, str]:
    """Parse an inline style string into an ordered property mapping.

    Parameters
    ----------
    style : str
        Raw ``style`` attribute value, e.g. ``"color: red; font-size: 16px;"``

    Returns
    -------
    dict[str, str]
        CamelCase property names mapped to trimmed values, in declaration
        order. A repeated property keeps its first position and its last value.

    Examples
    --------
    >>> parse_style("color: red; font-size: 16px;")
    {'color': 'red', 'fontSize': '16px'}
    >>> parse_style("color:; :red; color red;;; margin-top")
    {}

    """
    declarations: dict[str, str] = {}
    if not isinstance(style, str) or not style:
        return declarations

    for segment in style.split(STYLE_DECLARATION_SEPARATOR):
        raw_key, separator, raw_value = segment.partition(STYLE_PROPERTY_SEPARATOR)
        if not separator or not raw_key.strip() or not raw_value.strip():
            if segment.strip():
                logger.debug("Dropping malformed style declaration: %r", segment)
            continue

        key = to_camel_case(raw_key.strip())
        value = raw_value.strip()
        if key and value:
            declarations[key] = value

    return declarations


__all__ = ["parse_style", "to_camel_case"]
