"""Per-attribute filtering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .constants import ascii_lower, is_multi_url_attribute
from .entities import decode_entities_fully
from .url import filter_srcset, filter_url

if TYPE_CHECKING:
    from .node import Node
    from .whitelist import Whitelist

logger = logging.getLogger(__name__)


def filter_attribute(whitelist: Whitelist, tag: str, name: str, value: str) -> str | None:
    """Decide what happens to one attribute of element `tag`.

    Returns None when the attribute must be removed, otherwise the value to
    keep. Checks run in this order: attribute allowed, value allowed,
    boolean normalization, URL filtering. All of them see the value with
    every character reference decoded, the serializer escapes it again.
    """
    if not whitelist.is_attribute_allowed(tag, name):
        return None

    value = decode_entities_fully(value or "")

    if not whitelist.is_value_allowed(tag, name, value):
        return None

    if whitelist.is_boolean_attribute(name) and value and ascii_lower(value) != ascii_lower(name):
        value = ""

    if whitelist.is_url_attribute(name):
        if is_multi_url_attribute(name):
            value = filter_srcset(whitelist, tag, value)
        else:
            value = filter_url(whitelist, tag, value)

    return value


def sanitize_attributes(node: Node, whitelist: Whitelist) -> None:
    """Filter the attributes of element `node` in place, keeping their order."""
    if not node.attrs:
        return

    tag = node.name
    kept: dict[str, str] = {}
    for name, value in node.attrs.items():
        filtered = filter_attribute(whitelist, tag, name, value)
        if filtered is None:
            logger.debug("Removed attribute %s from <%s>", name, tag)
            continue
        kept[name] = filtered
    node.attrs = kept
