#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the markup conversion pipeline.

Options are frozen dataclasses so a single instance can be shared between
conversions without carrying state from one call into the next.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from html_injector.constants import (
    DEFAULT_CONTAINER_TAG,
    DEFAULT_HTML_PARSER,
    DEFAULT_SANITIZE,
    DEFAULT_TRAILING_SPACE,
    HTML_PARSERS,
    HtmlParser,
)
from html_injector.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class InjectorOptions(CloneFrozenMixin):
    """Configuration options for converting markup into an output node tree.

    Parameters
    ----------
    html_parser : {"html5lib", "html.parser", "lxml"}, default "html5lib"
        BeautifulSoup tree builder used for both sanitization and parsing.
        html5lib follows the browser recovery rules for malformed markup.
    sanitize : bool, default True
        Run the sanitizer before parsing. Disable only for trusted markup;
        handler attributes are dropped during conversion either way.
    container_tag : str, default "div"
        Tag name of the synthetic element wrapping the converted nodes.
    trailing_space : bool, default False
        Append a single-space text leaf after the converted nodes inside
        the container, matching older renderer output.
    allowed_tags : frozenset[str] or None, default None
        Override for the sanitizer's tag allowlist.
    allowed_attributes : Mapping[str, frozenset[str]] or None, default None
        Override for the sanitizer's attribute allowlist, keyed by tag name
        with "*" for attributes allowed on every tag.
    allowed_css_properties : frozenset[str] or None, default None
        Override for the sanitizer's CSS property allowlist.

    """

    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup tree builder: 'html5lib' (browser-like), 'html.parser' (built-in), 'lxml' (fast)",
            "choices": list(HTML_PARSERS),
            "importance": "core",
        },
    )
    sanitize: bool = field(
        default=DEFAULT_SANITIZE,
        metadata={
            "help": "Sanitize markup before parsing (disable only for trusted input)",
            "cli_name": "no-sanitize",
            "importance": "security",
        },
    )
    container_tag: str = field(
        default=DEFAULT_CONTAINER_TAG,
        metadata={"help": "Tag name of the container element wrapping converted nodes", "importance": "advanced"},
    )
    trailing_space: bool = field(
        default=DEFAULT_TRAILING_SPACE,
        metadata={
            "help": "Append a single-space text node after the converted nodes",
            "importance": "advanced",
        },
    )
    allowed_tags: frozenset[str] | None = field(
        default=None,
        metadata={"help": "Tag allowlist for the sanitizer (None uses the built-in list)", "importance": "security"},
    )
    allowed_attributes: Mapping[str, frozenset[str]] | None = field(
        default=None,
        metadata={
            "help": "Attribute allowlist per tag for the sanitizer (None uses the built-in list)",
            "importance": "security",
        },
    )
    allowed_css_properties: frozenset[str] | None = field(
        default=None,
        metadata={
            "help": "CSS property allowlist for the sanitizer (None uses the built-in list)",
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if self.html_parser not in HTML_PARSERS:
            raise ValidationError(
                f"html_parser must be one of {', '.join(HTML_PARSERS)}, got {self.html_parser!r}",
                parameter_name="html_parser",
                parameter_value=self.html_parser,
            )

        if not isinstance(self.container_tag, str) or not self.container_tag.strip():
            raise ValidationError(
                "container_tag must be a non-empty string",
                parameter_name="container_tag",
                parameter_value=self.container_tag,
            )

        if self.allowed_tags is not None:
            object.__setattr__(self, "allowed_tags", _to_name_set("allowed_tags", self.allowed_tags))

        if self.allowed_css_properties is not None:
            object.__setattr__(
                self,
                "allowed_css_properties",
                _to_name_set("allowed_css_properties", self.allowed_css_properties),
            )

        if self.allowed_attributes is not None:
            if not isinstance(self.allowed_attributes, Mapping):
                raise ValidationError(
                    "allowed_attributes must be a mapping of tag name to attribute names",
                    parameter_name="allowed_attributes",
                    parameter_value=self.allowed_attributes,
                )
            normalized = {
                tag: _to_name_set(f"allowed_attributes[{tag!r}]", names)
                for tag, names in self.allowed_attributes.items()
            }
            object.__setattr__(self, "allowed_attributes", normalized)


def _to_name_set(parameter_name: str, values: Any) -> frozenset[str]:
    """Coerce a name or a collection of names to a frozenset of strings."""
    if isinstance(values, str) or not isinstance(values, Iterable):
        values = (values,)
    values = tuple(values)
    if not all(isinstance(value, str) for value in values):
        raise ValidationError(
            f"{parameter_name} must be a collection of strings",
            parameter_name=parameter_name,
            parameter_value=values,
        )
    return frozenset(values)


__all__ = ["CloneFrozenMixin", "InjectorOptions"]
