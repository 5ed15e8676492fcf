#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Output node model for sanitized markup trees."""

from html_injector.ast.nodes import (
    ElementNode,
    OutputNode,
    PropertyMap,
    PropValue,
    StyleMap,
    TextLeaf,
    freeze_props,
)
from html_injector.ast.serialization import dict_to_node, json_to_node, node_to_dict, node_to_json
from html_injector.ast.utils import collect_keys, find_all, find_first, iter_elements, text_content
from html_injector.ast.visitors import NodeVisitor, TextCollector

__all__ = [
    "ElementNode",
    "NodeVisitor",
    "OutputNode",
    "PropValue",
    "PropertyMap",
    "StyleMap",
    "TextCollector",
    "TextLeaf",
    "collect_keys",
    "dict_to_node",
    "find_all",
    "find_first",
    "freeze_props",
    "iter_elements",
    "json_to_node",
    "node_to_dict",
    "node_to_json",
    "text_content",
]
