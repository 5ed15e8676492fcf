#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that turn output node trees back into text."""

from html_injector.renderers.html import HtmlRenderer, render_html

__all__ = ["HtmlRenderer", "render_html"]
