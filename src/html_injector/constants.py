#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for html_injector.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Pipeline Defaults - Container and normalization settings
3. Attribute Mapping - Renamed and filtered attribute names
4. Security Constants - Sanitization allowlists and blocklists
5. Rendering - HTML re-rendering of output trees
6. Command-Line Interface - Output formats and exit codes
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html5lib", "html.parser", "lxml"]
OutputFormat = Literal["json", "html"]

HTML_PARSERS: tuple[str, ...] = ("html5lib", "html.parser", "lxml")

# Distribution that provides each BeautifulSoup tree builder
HTML_PARSER_PACKAGES = {
    "html5lib": "html5lib",
    "html.parser": "",
    "lxml": "lxml",
}

# =============================================================================
# Pipeline Defaults
# =============================================================================

DEFAULT_HTML_PARSER: HtmlParser = "html5lib"
DEFAULT_SANITIZE = True
DEFAULT_CONTAINER_TAG = "div"
DEFAULT_TRAILING_SPACE = False
DEFAULT_CACHE_SIZE = 128

TRAILING_SPACE_TEXT = " "
MARKUP_START = "<"

WHITESPACE_RE = re.compile(r"\s+")

# =============================================================================
# Attribute Mapping
# =============================================================================

CLASS_ATTRIBUTE = "class"
CLASS_NAME_PROPERTY = "className"
STYLE_ATTRIBUTE = "style"

# "on" followed by a lowercase letter binds a live event callback
HANDLER_ATTRIBUTE_RE = re.compile(r"^on[a-z]")

# Hyphen followed by a lowercase letter, as in "background-color"
KEBAB_SEGMENT_RE = re.compile(r"-([a-z])")

STYLE_DECLARATION_SEPARATOR = ";"
STYLE_PROPERTY_SEPARATOR = ":"

# =============================================================================
# Security Constants
# =============================================================================

# Removed together with their content before the allowlist pass
DANGEROUS_HTML_ELEMENTS = frozenset(
    {
        "script",
        "style",
        "iframe",
        "object",
        "embed",
        "noscript",
        "template",
        "frame",
        "frameset",
        "base",
        "meta",
        "link",
    }
)

DANGEROUS_NULL_LIKE_CHARS = [
    "\x00",  # NULL
    "\ufeff",  # BOM/Zero Width No-Break Space
    "\u200b",  # Zero Width Space
    "\u200c",  # Zero Width Non-Joiner
    "\u200d",  # Zero Width Joiner
    "\u2060",  # Word Joiner
]

DANGEROUS_SCHEMES = {
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "ftp", "tel"})

URL_ATTRIBUTES = frozenset({"href", "src", "action", "formaction", "cite", "poster"})

ALLOWED_TAGS = frozenset(
    {
        "a",
        "abbr",
        "acronym",
        "address",
        "article",
        "aside",
        "b",
        "bdi",
        "bdo",
        "blockquote",
        "br",
        "button",
        "caption",
        "cite",
        "code",
        "col",
        "colgroup",
        "data",
        "dd",
        "del",
        "details",
        "dfn",
        "div",
        "dl",
        "dt",
        "em",
        "figcaption",
        "figure",
        "footer",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hr",
        "i",
        "img",
        "ins",
        "kbd",
        "label",
        "li",
        "main",
        "mark",
        "nav",
        "ol",
        "p",
        "picture",
        "pre",
        "q",
        "s",
        "samp",
        "section",
        "small",
        "source",
        "span",
        "strike",
        "strong",
        "sub",
        "summary",
        "sup",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "time",
        "tr",
        "u",
        "ul",
        "var",
        "wbr",
    }
)

# Attributes allowed on every element, "*" entry
GLOBAL_ATTRIBUTES = frozenset({"class", "id", "style", "title", "lang", "dir", "role", "hidden", "tabindex"})

# data-* and aria-* attributes carry no executable content
ALLOWED_ATTRIBUTE_PREFIXES = ("data-", "aria-")

ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {
    "*": GLOBAL_ATTRIBUTES,
    "a": frozenset({"href", "rel", "target", "name", "hreflang", "download"}),
    "abbr": frozenset({"title"}),
    "acronym": frozenset({"title"}),
    "blockquote": frozenset({"cite"}),
    "button": frozenset({"type", "name", "value", "disabled"}),
    "col": frozenset({"span", "width"}),
    "colgroup": frozenset({"span", "width"}),
    "data": frozenset({"value"}),
    "del": frozenset({"cite", "datetime"}),
    "details": frozenset({"open"}),
    "img": frozenset({"src", "srcset", "sizes", "alt", "width", "height", "loading"}),
    "ins": frozenset({"cite", "datetime"}),
    "label": frozenset({"for"}),
    "li": frozenset({"value"}),
    "ol": frozenset({"start", "reversed", "type"}),
    "q": frozenset({"cite"}),
    "source": frozenset({"srcset", "sizes", "media", "type"}),
    "td": frozenset({"colspan", "rowspan", "headers", "align", "valign"}),
    "th": frozenset({"colspan", "rowspan", "headers", "scope", "abbr", "align", "valign"}),
    "time": frozenset({"datetime"}),
}

ALLOWED_CSS_PROPERTIES = frozenset(
    {
        "align-items",
        "align-self",
        "background",
        "background-color",
        "border",
        "border-bottom",
        "border-collapse",
        "border-color",
        "border-left",
        "border-radius",
        "border-right",
        "border-spacing",
        "border-style",
        "border-top",
        "border-width",
        "bottom",
        "box-shadow",
        "box-sizing",
        "caption-side",
        "clear",
        "color",
        "cursor",
        "direction",
        "display",
        "flex",
        "flex-direction",
        "flex-wrap",
        "float",
        "font",
        "font-family",
        "font-size",
        "font-style",
        "font-variant",
        "font-weight",
        "gap",
        "height",
        "justify-content",
        "left",
        "letter-spacing",
        "line-height",
        "list-style",
        "list-style-position",
        "list-style-type",
        "margin",
        "margin-bottom",
        "margin-left",
        "margin-right",
        "margin-top",
        "max-height",
        "max-width",
        "min-height",
        "min-width",
        "opacity",
        "outline",
        "overflow",
        "overflow-wrap",
        "overflow-x",
        "overflow-y",
        "padding",
        "padding-bottom",
        "padding-left",
        "padding-right",
        "padding-top",
        "position",
        "right",
        "table-layout",
        "text-align",
        "text-decoration",
        "text-indent",
        "text-shadow",
        "text-transform",
        "top",
        "vertical-align",
        "visibility",
        "white-space",
        "width",
        "word-break",
        "word-spacing",
        "word-wrap",
        "z-index",
    }
)

# =============================================================================
# Rendering
# =============================================================================

VOID_ELEMENTS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

# =============================================================================
# Command-Line Interface
# =============================================================================

OUTPUT_FORMATS: tuple[str, ...] = ("json", "html")
DEFAULT_OUTPUT_FORMAT: OutputFormat = "json"
DEFAULT_JSON_INDENT = 2

EXIT_SUCCESS = 0
EXIT_NO_CONTENT = 1
EXIT_USAGE_ERROR = 2
