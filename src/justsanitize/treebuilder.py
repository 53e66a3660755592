"""Build `Node` trees from markup with html5lib.

html5lib does the HTML5 parsing (error recovery, implied tags, foster
parenting). Its tree walker then replays the result as tokens, which are
turned into the sanitizer's own node types here.

html5lib never fetches DTDs or resolves external entities, so no extra
hardening is needed around the parse.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import html5lib
from html5lib.constants import prefixes

from .constants import DOCTYPE_NODE, DOCUMENT_NODE, TEXT_NODE
from .node import CommentNode, ElementNode, Node, TextNode

logger = logging.getLogger(__name__)

_TREE_BUILDER = html5lib.getTreeBuilder("etree")
_TREE_WALKER = html5lib.getTreeWalker("etree")

_HTML_NAMESPACE = "http://www.w3.org/1999/xhtml"


def _namespace_prefix(namespace: str | None) -> str | None:
    if namespace is None or namespace == _HTML_NAMESPACE:
        return None
    return prefixes.get(namespace, namespace)


def _attribute_name(namespace: str | None, name: str) -> str:
    prefix = _namespace_prefix(namespace)
    # xmlns="..." comes through as (xmlns-ns, "xmlns"); keep it unprefixed.
    if prefix is None or name == prefix:
        return name
    return f"{prefix}:{name}"


class HtmlTreeBuilder:
    """Consumes html5lib tree-walker tokens and builds a `Node` tree.

    The root is always a "#document" node. Adjacent character tokens are
    merged into a single text node.
    """

    __slots__ = ("_current", "root")

    def __init__(self) -> None:
        self.root = Node(DOCUMENT_NODE)
        self._current = self.root

    def feed(self, tokens: Iterable[Mapping[str, Any]]) -> Node:
        for token in tokens:
            kind = token["type"]
            if kind == "StartTag":
                self._start_tag(token, void=False)
            elif kind == "EmptyTag":
                self._start_tag(token, void=True)
            elif kind == "EndTag":
                self._end_tag()
            elif kind in {"Characters", "SpaceCharacters"}:
                self._characters(token["data"])
            elif kind == "Comment":
                self._current.append_child(CommentNode(token["data"]))
            elif kind == "Doctype":
                self._current.append_child(Node(DOCTYPE_NODE, data=token.get("name") or ""))
            else:
                # "SerializeError" and "Unknown" carry nothing worth keeping
                logger.debug("Ignored walker token %s", kind)
        return self.root

    def _start_tag(self, token: Mapping[str, Any], *, void: bool) -> None:
        attrs: dict[str, str] = {}
        for (namespace, name), value in token["data"].items():
            key = _attribute_name(namespace, name)
            if key not in attrs:
                attrs[key] = value
        element = ElementNode(token["name"], attrs, namespace=_namespace_prefix(token["namespace"]))
        self._current.append_child(element)
        if not void:
            self._current = element

    def _end_tag(self) -> None:
        if self._current.parent is not None:
            self._current = self._current.parent

    def _characters(self, data: str) -> None:
        if not data:
            return
        children = self._current.children
        if children and children[-1].name == TEXT_NODE:
            children[-1].data = (children[-1].data or "") + data
        else:
            self._current.append_child(TextNode(data))


def parse_fragment(html: str, container: str = "div") -> Node:
    """Parse `html` as the contents of a `container` element.

    Returns a "#document" node whose children are the parsed nodes.
    """
    parser = html5lib.HTMLParser(tree=_TREE_BUILDER, namespaceHTMLElements=False)
    fragment = parser.parseFragment(html, container=container)
    if parser.errors:
        logger.debug("Recovered from %d parse errors", len(parser.errors))
    return HtmlTreeBuilder().feed(_TREE_WALKER(fragment))
