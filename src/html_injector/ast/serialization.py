#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/ast/serialization.py
"""JSON serialization and deserialization for output node trees.

Serialized trees let renderers outside this process (a JavaScript front end,
a template engine) consume the sanitized structure.

The JSON format is:

- Text leaves: ``{"type": "text", "content": "..."}``
- Elements: ``{"type": "element", "tag": "p", "key": 0, "props": {...},
  "children": [...]}``

Property order and style-map order are preserved.

Every walk here uses an explicit stack. Trees are written and rebuilt
without recursion, so arbitrarily deep nesting does not hit the
interpreter's recursion limit. :func:`node_to_json` produces exactly what
``json.dumps(node_to_dict(node), indent=indent, ensure_ascii=False)`` would.

Examples
--------
    >>> from html_injector.ast import ElementNode, TextLeaf
    >>> tree = ElementNode("p", {"className": "lead"}, (TextLeaf("Hi"),), key=0)
    >>> node_to_json(tree)
    '{"type": "element", "tag": "p", "key": 0, "props": {"className": "lead"}, "children": [{"type": "text", "content": "Hi"}]}'

"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from typing import Any, Union

from html_injector.ast.nodes import ElementNode, OutputNode, TextLeaf
from html_injector.exceptions import SerializationError

TEXT_TYPE = "text"
ELEMENT_TYPE = "element"

_EXHAUSTED = object()


def _plain_props(node: ElementNode) -> dict[str, Any]:
    return {name: dict(value) if isinstance(value, Mapping) else value for name, value in node.props.items()}


def _shallow_dict(node: Any) -> dict[str, Any]:
    """Serialize one node, leaving an element's children list empty."""
    if isinstance(node, TextLeaf):
        return {"type": TEXT_TYPE, "content": node.content}

    if isinstance(node, ElementNode):
        return {
            "type": ELEMENT_TYPE,
            "tag": node.tag,
            "key": node.key,
            "props": _plain_props(node),
            "children": [],
        }

    raise TypeError(f"Cannot serialize object of type {type(node).__name__}")


def node_to_dict(node: OutputNode) -> dict[str, Any]:
    """Convert an output node tree to plain dictionaries.

    Parameters
    ----------
    node : TextLeaf or ElementNode
        Root of the tree to serialize

    Returns
    -------
    dict
        JSON-compatible representation

    Raises
    ------
    TypeError
        If ``node`` (or any descendant) is not an output node

    """
    root = _shallow_dict(node)
    stack: list[tuple[OutputNode, dict[str, Any]]] = [(node, root)]
    while stack:
        current, serialized = stack.pop()
        if not isinstance(current, ElementNode):
            continue
        for child in current.children:
            child_dict = _shallow_dict(child)
            serialized["children"].append(child_dict)
            stack.append((child, child_dict))
    return root


def _check_element(data: Mapping[str, Any]) -> tuple[str, int, Mapping[str, Any], list[Any]]:
    tag = data.get("tag")
    key = data.get("key", 0)
    props = data.get("props", {})
    children = data.get("children", [])
    if not isinstance(tag, str) or not tag:
        raise SerializationError("Element tag must be a non-empty string", payload=data)
    if not isinstance(key, int) or isinstance(key, bool):
        raise SerializationError("Element key must be an integer", payload=data)
    if not isinstance(props, Mapping) or not isinstance(children, list):
        raise SerializationError("Element props must be a mapping and children a list", payload=data)
    return tag, key, props, children


def _text_or_none(data: Any) -> TextLeaf | None:
    """Rebuild a text leaf, returning None when ``data`` describes an element."""
    if not isinstance(data, Mapping):
        raise SerializationError("Serialized node must be a mapping", payload=data)

    node_type = data.get("type")
    if node_type == TEXT_TYPE:
        content = data.get("content")
        if not isinstance(content, str):
            raise SerializationError("Text node content must be a string", payload=data)
        return TextLeaf(content)
    if node_type == ELEMENT_TYPE:
        return None

    raise SerializationError(f"Unknown node type: {node_type!r}", payload=data)


def dict_to_node(data: Mapping[str, Any]) -> OutputNode:
    """Rebuild an output node tree from its dictionary form.

    Parameters
    ----------
    data : Mapping
        Dictionary produced by :func:`node_to_dict`

    Returns
    -------
    TextLeaf or ElementNode
        Reconstructed tree

    Raises
    ------
    SerializationError
        If the data does not describe a valid node

    """
    leaf = _text_or_none(data)
    if leaf is not None:
        return leaf

    tag, key, props, children = _check_element(data)
    # (tag, key, props, remaining children, rebuilt children)
    stack: list[tuple[str, int, Mapping[str, Any], Iterator[Any], list[OutputNode]]] = [
        (tag, key, props, iter(children), [])
    ]
    while True:
        tag, key, props, pending, rebuilt = stack[-1]
        child = next(pending, _EXHAUSTED)

        if child is _EXHAUSTED:
            stack.pop()
            element = ElementNode(tag=tag, props=props, children=tuple(rebuilt), key=key)
            if not stack:
                return element
            stack[-1][4].append(element)
            continue

        leaf = _text_or_none(child)
        if leaf is not None:
            rebuilt.append(leaf)
        else:
            child_tag, child_key, child_props, child_children = _check_element(child)
            stack.append((child_tag, child_key, child_props, iter(child_children), []))


def node_to_json(node: OutputNode, indent: int | None = None) -> str:
    """Serialize an output node tree to a JSON string.

    Parameters
    ----------
    node : TextLeaf or ElementNode
        Root of the tree to serialize
    indent : int, optional
        Indentation width, with the same meaning as in :func:`json.dumps`

    Returns
    -------
    str
        JSON document

    Raises
    ------
    TypeError
        If ``node`` (or any descendant) is not an output node

    """
    pad = None if indent is None else " " * indent
    item_sep = ", " if pad is None else ","

    def newline(level: int) -> str:
        return "" if pad is None else "\n" + pad * level

    def value(obj: Any, level: int) -> str:
        encoded = json.dumps(obj, indent=indent, ensure_ascii=False)
        return encoded if pad is None else encoded.replace("\n", "\n" + pad * level)

    parts: list[str] = []
    # Pending items: literal text, or a node with its nesting level
    stack: list[Union[str, tuple[Any, int]]] = [(node, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        current, level = item
        inner = level + 1
        if isinstance(current, TextLeaf):
            fields = [("type", TEXT_TYPE), ("content", current.content)]
        elif isinstance(current, ElementNode):
            fields = [
                ("type", ELEMENT_TYPE),
                ("tag", current.tag),
                ("key", current.key),
                ("props", _plain_props(current)),
            ]
        else:
            raise TypeError(f"Cannot serialize object of type {type(current).__name__}")

        parts.append("{")
        parts.append(
            item_sep.join(f"{newline(inner)}{json.dumps(name)}: {value(obj, inner)}" for name, obj in fields)
        )
        if not isinstance(current, ElementNode):
            parts.append(newline(level) + "}")
            continue

        parts.append(f'{item_sep}{newline(inner)}"children": ')
        children = current.children
        if not children:
            parts.append("[]" + newline(level) + "}")
            continue

        parts.append("[")
        stack.append(newline(inner) + "]" + newline(level) + "}")
        for index in range(len(children) - 1, -1, -1):
            stack.append((children[index], inner + 1))
            stack.append((item_sep if index else "") + newline(inner + 1))

    return "".join(parts)


def json_to_node(json_str: str) -> OutputNode:
    """Deserialize an output node tree from a JSON string.

    Raises
    ------
    SerializationError
        If the string is not valid JSON, nests too deeply for the JSON
        decoder, or does not describe a node

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e.msg}", payload=json_str, original_error=e) from e
    except RecursionError as e:
        raise SerializationError("JSON document nests too deeply to decode", payload=json_str, original_error=e) from e
    return dict_to_node(data)


__all__ = ["dict_to_node", "json_to_node", "node_to_dict", "node_to_json"]
