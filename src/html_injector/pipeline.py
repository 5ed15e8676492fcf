#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/pipeline.py
"""Markup to output tree pipeline.

The pipeline validates its input, normalizes whitespace, sanitizes, parses
and converts, then wraps the converted top-level nodes in one container
element:

    raw string -> sanitize_html -> parse_html -> convert_nodes -> container

Inputs that are not strings, are empty, or do not start with ``<`` once
leading whitespace is ignored produce no content (None).

Every call starts its identifier counter at zero, so the same input always
yields the same tree, identifiers included.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from html_injector.ast.nodes import ElementNode, OutputNode, TextLeaf
from html_injector.constants import DEFAULT_CACHE_SIZE, MARKUP_START, TRAILING_SPACE_TEXT, WHITESPACE_RE
from html_injector.converter import convert_nodes
from html_injector.exceptions import InvalidOptionsError
from html_injector.options import InjectorOptions
from html_injector.parser import parse_html
from html_injector.sanitizer import sanitize_html

logger = logging.getLogger(__name__)


def normalize_markup(markup: Any) -> str | None:
    """Validate raw input and collapse its whitespace.

    Parameters
    ----------
    markup : Any
        Candidate markup

    Returns
    -------
    str or None
        Markup with every whitespace run collapsed to one space and both ends
        trimmed, or None when the input cannot hold markup

    Examples
    --------
    >>> normalize_markup("  <p>\\n  Hi </p> ")
    '<p> Hi </p>'
    >>> normalize_markup("plain text") is None
    True

    """
    if not isinstance(markup, str) or not markup:
        return None

    normalized = WHITESPACE_RE.sub(" ", markup).strip()
    if not normalized.startswith(MARKUP_START):
        return None

    return normalized


def convert(markup: Any, options: InjectorOptions | None = None) -> ElementNode | None:
    """Convert untrusted markup into a sanitized output node tree.

    Parameters
    ----------
    markup : Any
        Markup string. Non-string, empty and whitespace-only values are
        accepted and produce None.
    options : InjectorOptions, optional
        Pipeline configuration

    Returns
    -------
    ElementNode or None
        Container element holding the converted top-level nodes, or None
        when there is no content

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not an InjectorOptions instance
    DependencyError
        If the configured parser backend is not installed

    Examples
    --------
    >>> tree = convert('<p class="c" style="color: red">Hi</p>')
    >>> paragraph = tree.children[0]
    >>> paragraph.tag, paragraph.class_name, dict(paragraph.style)
    ('p', 'c', {'color': 'red'})
    >>> convert("   ") is None
    True

    """
    if options is not None and not isinstance(options, InjectorOptions):
        raise InvalidOptionsError(InjectorOptions, type(options))
    cfg = options or InjectorOptions()

    normalized = normalize_markup(markup)
    if normalized is None:
        logger.debug("No markup to convert (input type %s)", type(markup).__name__)
        return None

    cleaned = sanitize_html(normalized, cfg) if cfg.sanitize else normalized
    if not cleaned:
        logger.debug("Sanitization left no content")
        return None

    children, counter = convert_nodes(parse_html(cleaned, cfg.html_parser), 0)
    if cfg.trailing_space:
        children = children + (TextLeaf(TRAILING_SPACE_TEXT),)

    logger.debug("Converted %d top-level nodes, %d elements", len(children), counter)
    return ElementNode(tag=cfg.container_tag, children=children, key=counter)


@lru_cache(maxsize=DEFAULT_CACHE_SIZE)
def _convert_string_cached(markup: str) -> ElementNode | None:
    return convert(markup)


def convert_cached(markup: Any) -> ElementNode | None:
    """Memoized :func:`convert` with default options, keyed by the input string.

    Returned trees are immutable, so sharing them between callers is safe.
    """
    if not isinstance(markup, str):
        return None
    return _convert_string_cached(markup)


def clear_conversion_cache() -> None:
    """Drop every memoized conversion."""
    _convert_string_cached.cache_clear()


class HtmlInjector:
    """Reusable converter bound to one set of options.

    The instance holds nothing but its frozen options; each :meth:`convert`
    call owns its own identifier counter.

    Parameters
    ----------
    options : InjectorOptions, optional
        Pipeline configuration

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not an InjectorOptions instance

    """

    def __init__(self, options: InjectorOptions | None = None):
        """Initialize the converter with validated options."""
        if options is not None and not isinstance(options, InjectorOptions):
            raise InvalidOptionsError(InjectorOptions, type(options))
        self.options: InjectorOptions = options or InjectorOptions()

    def convert(self, markup: Any) -> ElementNode | None:
        """Convert markup with this converter's options."""
        return convert(markup, self.options)

    def convert_children(self, markup: Any) -> tuple[OutputNode, ...]:
        """Convert markup and return the container's children, empty when there is no content."""
        tree = self.convert(markup)
        return tree.children if tree is not None else ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(options={self.options!r})"


__all__ = ["HtmlInjector", "clear_conversion_cache", "convert", "convert_cached", "normalize_markup"]
