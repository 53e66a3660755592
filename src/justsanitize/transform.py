"""Apply a whitelist to a parsed tree.

The walk is post-order: every node's children are sanitized before the node
itself is judged, so when a disallowed element is unwrapped the children it
hands to its parent are already safe.

Unwrapped and removed nodes are first turned into "#document-fragment"
nodes where they stand (a removed node keeps no children). A final pass
splices every fragment's children into the nearest surviving ancestor, so
the cost stays linear in the size of the tree however many siblings are
unwrapped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .attributes import sanitize_attributes
from .constants import DOCUMENT_NODE, DROP_CONTENT_ELEMENTS, FRAGMENT_NODE, TEXT_NODE, ascii_lower

if TYPE_CHECKING:
    from .node import Node
    from .whitelist import Whitelist

logger = logging.getLogger(__name__)


def _become_fragment(node: Node, *, keep_children: bool) -> None:
    if not keep_children:
        for child in node.children:
            child.parent = None
        node.children = []
    node.name = FRAGMENT_NODE
    node.attrs = {}
    node.namespace = None
    node.data = None


def _is_element_allowed(node: Node, whitelist: Whitelist) -> bool:
    # Foreign elements ("svg" / "math" namespace) only survive inside an
    # allowed root of their namespace. A "source" or "col" that escaped an
    # unwrapped <svg> would be written as an HTML void element.
    if node.namespace is not None and not whitelist.is_tag_allowed(node.namespace):
        return False
    return whitelist.is_tag_allowed(node.name)


def _sanitize_node(node: Node, whitelist: Whitelist) -> None:
    name = node.name

    if name in {DOCUMENT_NODE, TEXT_NODE, FRAGMENT_NODE}:
        return

    if not node.is_element:
        logger.debug("Removed %s node", name)
        _become_fragment(node, keep_children=False)
        return

    if _is_element_allowed(node, whitelist):
        sanitize_attributes(node, whitelist)
        return

    if ascii_lower(name) in DROP_CONTENT_ELEMENTS:
        logger.debug("Removed <%s> with its content", name)
        _become_fragment(node, keep_children=False)
        return

    logger.debug("Unwrapped disallowed element <%s>", name)
    _become_fragment(node, keep_children=True)


def _dissolve_fragments(root: Node) -> None:
    """Replace every fragment below `root` by its children, in one pass."""
    stack = [root]
    while stack:
        node = stack.pop()
        if not any(child.name == FRAGMENT_NODE for child in node.children):
            stack.extend(node.children)
            continue

        flat: list[Node] = []
        pending = list(reversed(node.children))
        while pending:
            child = pending.pop()
            if child.name == FRAGMENT_NODE:
                pending.extend(reversed(child.children))
                child.children = []
                child.parent = None
                continue
            child.parent = node
            flat.append(child)
        node.children = flat
        stack.extend(flat)


def sanitize_tree(root: Node, whitelist: Whitelist) -> Node:
    """Sanitize the tree under `root` in place and return the root.

    Allowed elements keep their position and have their attributes filtered.
    Disallowed elements are replaced by their sanitized children, except
    script and style which are removed along with their content. Comments,
    doctypes and other non-element nodes are removed. Elements in the SVG
    or MathML namespace are disallowed unless "svg" or "math" is allowed.

    When `root` itself is not allowed it is turned into a
    "#document-fragment" holding whatever survived.
    """
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, visited = stack.pop()
        if not visited:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
            continue
        _sanitize_node(node, whitelist)

    _dissolve_fragments(root)
    return root
