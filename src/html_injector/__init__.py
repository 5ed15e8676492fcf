"""html_injector - Convert untrusted HTML into a sanitized, renderable node tree.

html_injector takes an untrusted markup string, sanitizes it, parses it the
way a browser would and converts the result into an immutable output tree
ready for a component renderer. Attribute names follow renderer conventions
(``className`` instead of ``class``), inline styles become camelCase property
mappings and event handler attributes never reach the output.

Pipeline
--------
    raw string -> sanitize (bleach) -> parse (BeautifulSoup) -> convert -> container

Key Features
------------
- Sanitization with tag, attribute, URL protocol and CSS property allowlists
- Browser-like recovery for malformed markup via html5lib
- Per-call element identifiers, unique and in document order
- Immutable output nodes that can be shared between threads
- JSON serialization and HTML re-rendering for previews
- Command-line interface (``html-injector``)

Requirements
------------
- Python 3.10+
- beautifulsoup4, bleach (with the css extra), html5lib

Examples
--------
    >>> from html_injector import convert
    >>> tree = convert('<p class="note" style="font-size: 16px" onclick="x()">Hi</p>')
    >>> paragraph = tree.children[0]
    >>> paragraph.tag, paragraph.class_name, dict(paragraph.style)
    ('p', 'note', {'fontSize': '16px'})
    >>> "onclick" in paragraph.props
    False

Reusing a configuration:

    >>> from html_injector import HtmlInjector, InjectorOptions
    >>> injector = HtmlInjector(InjectorOptions(container_tag="section"))
    >>> injector.convert("<b>bold</b>").tag
    'section'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from html_injector.ast import (
    ElementNode,
    NodeVisitor,
    OutputNode,
    TextLeaf,
    collect_keys,
    dict_to_node,
    find_all,
    find_first,
    iter_elements,
    json_to_node,
    node_to_dict,
    node_to_json,
    text_content,
)
from html_injector.attributes import is_handler_attribute, map_attribute, map_attributes
from html_injector.exceptions import (
    DependencyError,
    HtmlInjectorError,
    InvalidOptionsError,
    SerializationError,
    ValidationError,
)
from html_injector.options import InjectorOptions
from html_injector.parser import ParsedElement, ParsedText, parse_html
from html_injector.pipeline import HtmlInjector, clear_conversion_cache, convert, convert_cached, normalize_markup
from html_injector.renderers import HtmlRenderer, render_html
from html_injector.sanitizer import sanitize_html
from html_injector.styles import parse_style, to_camel_case

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Pipeline
    "HtmlInjector",
    "InjectorOptions",
    "clear_conversion_cache",
    "convert",
    "convert_cached",
    "normalize_markup",
    # Stages
    "ParsedElement",
    "ParsedText",
    "is_handler_attribute",
    "map_attribute",
    "map_attributes",
    "parse_html",
    "parse_style",
    "sanitize_html",
    "to_camel_case",
    # Output nodes
    "ElementNode",
    "NodeVisitor",
    "OutputNode",
    "TextLeaf",
    "collect_keys",
    "dict_to_node",
    "find_all",
    "find_first",
    "iter_elements",
    "json_to_node",
    "node_to_dict",
    "node_to_json",
    "text_content",
    # Rendering
    "HtmlRenderer",
    "render_html",
    # Exceptions
    "DependencyError",
    "HtmlInjectorError",
    "InvalidOptionsError",
    "SerializationError",
    "ValidationError",
]
