#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/sanitizer.py
"""HTML sanitization for untrusted markup.

Sanitization runs before parsing and is the primary defense against script
injection. It works in two passes:

1. BeautifulSoup pass: strip null-like characters, remove dangerous elements
   together with their content (``<script>``, ``<iframe>``, ...) and rewrite
   ``srcset`` attributes down to their safe entries.
2. bleach pass: keep only allowlisted tags, attributes, URL protocols and CSS
   properties (via ``bleach.css_sanitizer.CSSSanitizer``). Disallowed tags are
   stripped with their text kept; comments are removed.

Event handler attributes are never allowlisted. The converter drops them a
second time, independently of this module.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from urllib.parse import urlparse

import bleach
from bleach.css_sanitizer import CSSSanitizer
from bs4 import BeautifulSoup
from bs4.element import Tag

from html_injector.attributes import is_handler_attribute
from html_injector.constants import (
    ALLOWED_ATTRIBUTE_PREFIXES,
    ALLOWED_ATTRIBUTES,
    ALLOWED_CSS_PROPERTIES,
    ALLOWED_PROTOCOLS,
    ALLOWED_TAGS,
    DANGEROUS_HTML_ELEMENTS,
    DANGEROUS_NULL_LIKE_CHARS,
    DANGEROUS_SCHEMES,
    STYLE_ATTRIBUTE,
    URL_ATTRIBUTES,
)
from html_injector.options import InjectorOptions
from html_injector.parser import content_root, make_soup

logger = logging.getLogger(__name__)

_URL_IGNORED_CHARS_RE = re.compile(r"[\s\x00-\x1f\x7f]+")
_CSS_URL_RE = re.compile(r"url\s*\(\s*[\"']?\s*([^)\"']+)")


def sanitize_null_bytes(content: str) -> str:
    """Remove null bytes and zero-width characters that can bypass filters.

    Examples
    --------
    >>> sanitize_null_bytes("Hello\\x00World")
    'HelloWorld'

    """
    if not content:
        return content

    for char in DANGEROUS_NULL_LIKE_CHARS:
        if char in content:
            content = content.replace(char, "")

    return content


def is_url_safe(url: str) -> bool:
    """Check if a URL is safe (no dangerous schemes).

    Browsers ignore whitespace and control characters inside a scheme, so
    they are removed before checking.

    Examples
    --------
    >>> is_url_safe("https://example.com")
    True
    >>> is_url_safe("/relative/path")
    True
    >>> is_url_safe("java\\tscript:alert(1)")
    False
    >>> is_url_safe("data:image/png;base64,AAAA")
    True

    """
    if not url or not url.strip():
        return True

    url_lower = _URL_IGNORED_CHARS_RE.sub("", url).lower()

    if url_lower.startswith(("#", "/", "./", "../", "?")):
        return True

    if any(url_lower.startswith(scheme) for scheme in DANGEROUS_SCHEMES):
        return False

    try:
        scheme = urlparse(url_lower).scheme
    except ValueError:
        # unparseable URLs are treated as hostile
        return False

    return scheme not in ("javascript", "vbscript", "about")


def is_style_safe(style_value: str) -> bool:
    """Check if a CSS style attribute value is safe.

    Rejects the IE-only ``expression()`` function and ``url()`` references
    with dangerous schemes.

    Examples
    --------
    >>> is_style_safe("color: red; font-size: 12px;")
    True
    >>> is_style_safe("background: url(javascript:alert(1))")
    False
    >>> is_style_safe("width: expression(alert(1))")
    False

    """
    if not style_value:
        return True

    style_lower = style_value.lower()

    if "expression(" in style_lower or "expression (" in style_lower:
        return False

    for match in _CSS_URL_RE.finditer(style_lower):
        if not is_url_safe(match.group(1).strip()):
            return False

    return True


def sanitize_srcset(srcset_value: str) -> str | None:
    """Keep only the safe entries of a ``srcset`` attribute value.

    Returns None when no safe entry remains.

    Examples
    --------
    >>> sanitize_srcset("image1.jpg 1x, image2.jpg 2x")
    'image1.jpg 1x, image2.jpg 2x'
    >>> sanitize_srcset("safe.jpg 1x, javascript:alert(1) 2x")
    'safe.jpg 1x'
    >>> sanitize_srcset("javascript:alert(1) 1x") is None
    True

    """
    if not srcset_value:
        return None

    safe_entries = []
    for entry in srcset_value.split(","):
        parts = entry.strip().split(None, 1)
        if not parts:
            continue
        url = parts[0]
        if is_url_safe(url):
            safe_entries.append(" ".join(parts))

    if not safe_entries:
        return None

    return ", ".join(safe_entries)


def _strip_dangerous_content(soup: BeautifulSoup) -> None:
    """Remove dangerous elements and unsafe srcset entries in place."""
    for tag in soup.find_all(sorted(DANGEROUS_HTML_ELEMENTS)):
        # a removed ancestor already took this tag with it
        if isinstance(tag, Tag) and not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(srcset=True):
        if not isinstance(tag, Tag):
            continue
        sanitized = sanitize_srcset(str(tag["srcset"]))
        if sanitized is None:
            del tag["srcset"]
        else:
            tag["srcset"] = sanitized


def build_attribute_filter(allowed_attributes: Mapping[str, frozenset[str]]) -> Callable[[str, str, str], bool]:
    """Build the bleach attribute callback for an attribute allowlist.

    Parameters
    ----------
    allowed_attributes : Mapping[str, frozenset[str]]
        Allowed attribute names per tag; the ``"*"`` entry applies to every tag

    Returns
    -------
    Callable[[str, str, str], bool]
        ``filter(tag, name, value)`` returning True to keep the attribute

    """
    global_attributes = allowed_attributes.get("*", frozenset())

    def filter_attributes(tag: str, name: str, value: str) -> bool:
        if is_handler_attribute(name.lower()):
            return False

        allowed = (
            name in global_attributes
            or name in allowed_attributes.get(tag, frozenset())
            or name.startswith(ALLOWED_ATTRIBUTE_PREFIXES)
        )
        if not allowed:
            return False

        if name == STYLE_ATTRIBUTE:
            return is_style_safe(value)
        if name == "srcset":
            return sanitize_srcset(value) is not None
        if name in URL_ATTRIBUTES:
            return is_url_safe(value)
        return True

    return filter_attributes


def build_cleaner(options: InjectorOptions) -> bleach.Cleaner:
    """Create a bleach cleaner from the allowlists in ``options``."""
    allowed_tags = options.allowed_tags if options.allowed_tags is not None else ALLOWED_TAGS
    allowed_attributes = options.allowed_attributes if options.allowed_attributes is not None else ALLOWED_ATTRIBUTES
    allowed_css = (
        options.allowed_css_properties if options.allowed_css_properties is not None else ALLOWED_CSS_PROPERTIES
    )

    return bleach.Cleaner(
        tags=allowed_tags,
        attributes=build_attribute_filter(allowed_attributes),
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
        strip_comments=True,
        css_sanitizer=CSSSanitizer(allowed_css_properties=allowed_css),
    )


def sanitize_html(markup: str, options: InjectorOptions | None = None) -> str:
    """Sanitize untrusted markup.

    Parameters
    ----------
    markup : str
        Markup to clean
    options : InjectorOptions, optional
        Parser selection and allowlist overrides

    Returns
    -------
    str
        Sanitized markup; empty when nothing safe remains

    Raises
    ------
    DependencyError
        If the configured tree builder is not installed

    Examples
    --------
    >>> sanitize_html('<p onclick="alert(1)">Hi<script>alert(2)</script></p>')
    '<p>Hi</p>'

    """
    if not markup:
        return ""

    cfg = options or InjectorOptions()

    markup = sanitize_null_bytes(markup)
    soup = make_soup(markup, cfg.html_parser)
    _strip_dangerous_content(soup)
    fragment = content_root(soup).decode_contents()

    cleaned = build_cleaner(cfg).clean(fragment)
    logger.debug("Sanitized markup from %d to %d characters", len(markup), len(cleaned))
    return cleaned


__all__ = [
    "build_attribute_filter",
    "build_cleaner",
    "is_style_safe",
    "is_url_safe",
    "sanitize_html",
    "sanitize_null_bytes",
    "sanitize_srcset",
]
