"""HTML serialization for sanitized trees."""

# ruff: noqa: PERF401

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import (
    COMMENT_NODE,
    DOCTYPE_NODE,
    DOCUMENT_NODE,
    FRAGMENT_NODE,
    RAWTEXT_ELEMENTS,
    TEXT_NODE,
    VOID_ELEMENTS,
)

if TYPE_CHECKING:
    from .node import Node


def escape_text(text: str | None) -> str:
    if not text:
        return ""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def escape_attr_value(value: str | None) -> str:
    """Escape a value for a double-quoted attribute.

    Single quotes are escaped too, so the result is also safe if a consumer
    re-quotes it.
    """
    if not value:
        return ""
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def serialize_start_tag(name: str, attrs: dict[str, str] | None) -> str:
    """Render ``<name attr="value">``. Empty values render as ``attr=""``."""
    parts: list[str] = ["<", name]
    if attrs:
        for key, value in attrs.items():
            parts.extend([" ", key, '="', escape_attr_value(value), '"'])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


# A single leading newline inside these is eaten by the parser, so one is
# written back when the content starts with a newline.
_NEWLINE_SENSITIVE_ELEMENTS = frozenset({"pre", "textarea", "listing"})


def _is_void(node: Node) -> bool:
    return node.namespace is None and node.name in VOID_ELEMENTS


def _starts_with_newline(node: Node) -> bool:
    first = node.children[0] if node.children else None
    return first is not None and first.name == TEXT_NODE and (first.data or "").startswith("\n")


def _is_rawtext_parent(node: Node | None) -> bool:
    return node is not None and node.namespace is None and node.name in RAWTEXT_ELEMENTS


def to_html(node: Node) -> str:
    """Convert `node` and its descendants to an HTML string.

    Containers ("#document", "#document-fragment") render their children only.
    """
    parts: list[str] = []
    # Items are either nodes still to render or literal end tags.
    stack: list[Node | str] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        name = item.name
        if name == TEXT_NODE:
            if _is_rawtext_parent(item.parent):
                parts.append(item.data or "")
            else:
                parts.append(escape_text(item.data))
            continue

        if name == COMMENT_NODE:
            parts.append(f"<!--{item.data or ''}-->")
            continue

        if name == DOCTYPE_NODE:
            parts.append(f"<!DOCTYPE {item.data or 'html'}>")
            continue

        if name not in {DOCUMENT_NODE, FRAGMENT_NODE}:
            parts.append(serialize_start_tag(name, item.attrs))
            if _is_void(item):
                continue
            if item.namespace is None and name in _NEWLINE_SENSITIVE_ELEMENTS and _starts_with_newline(item):
                parts.append("\n")
            stack.append(serialize_end_tag(name))

        stack.extend(reversed(item.children))

    return "".join(parts)


def to_test_format(node: Node, indent: int = 0) -> str:
    """Convert node to the html5lib test format.

    Uses '| ' prefixes and two-space indentation per level. Handy for
    asserting on tree shape.
    """
    if node.name in {DOCUMENT_NODE, FRAGMENT_NODE}:
        return "\n".join(to_test_format(child, indent) for child in node.children)

    if node.name == COMMENT_NODE:
        return f"| {' ' * indent}<!-- {node.data or ''} -->"

    if node.name == DOCTYPE_NODE:
        return f"| <!DOCTYPE {node.data or ''}>"

    if node.name == TEXT_NODE:
        return f'| {" " * indent}"{node.data or ""}"'

    qualified = f"{node.namespace} {node.name}" if node.namespace else node.name
    lines = [f"| {' ' * indent}<{qualified}>"]
    for key, value in sorted(node.attrs.items()):
        lines.append(f'| {" " * (indent + 2)}{key}="{value}"')
    for child in node.children:
        lines.append(to_test_format(child, indent + 2))
    return "\n".join(lines)
