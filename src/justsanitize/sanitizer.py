"""The `Sanitizer` facade: parse, sanitize, serialize."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import InvalidInputError
from .presets import BasicWhitelist
from .serialize import to_html
from .transform import sanitize_tree
from .treebuilder import parse_fragment

if TYPE_CHECKING:
    from .node import Node
    from .whitelist import Whitelist


def _as_text(html: str | bytes) -> str:
    if isinstance(html, bytes):
        try:
            return html.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidInputError(f"Input is not valid UTF-8: {exc.reason} at byte {exc.start}") from exc
    if isinstance(html, str):
        try:
            html.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidInputError(f"Input is not valid UTF-8: {exc.reason} at index {exc.start}") from exc
        return html
    raise TypeError(f"Expected str or bytes, got {type(html).__name__}")


class Sanitizer:
    """Sanitizes HTML fragments against a `Whitelist`.

    The whitelist is only read, so one sanitizer (or one whitelist shared by
    several sanitizers) can serve concurrent calls once it is configured.

        sanitizer = Sanitizer(BasicWhitelist())
        safe = sanitizer.sanitize(untrusted)
    """

    __slots__ = ("_whitelist",)

    def __init__(self, whitelist: Whitelist) -> None:
        self._whitelist = whitelist

    def __repr__(self) -> str:
        return f"Sanitizer({self._whitelist!r})"

    def whitelist(self) -> Whitelist:
        """Return the live whitelist; changes to it affect later calls."""
        return self._whitelist

    def sanitize(self, html: str | bytes) -> str:
        """Return a safe version of the HTML fragment `html`.

        `bytes` input must be UTF-8. NUL characters are removed before
        parsing and the result is stripped of surrounding whitespace.

        Raises `InvalidInputError` for input that is not valid UTF-8 and
        `TypeError` for anything other than `str` or `bytes`.
        """
        text = _as_text(html).replace("\x00", "")
        if not text:
            return ""

        root = parse_fragment(text)
        self.sanitize_tree(root)
        return to_html(root).strip()

    def sanitize_tree(self, root: Node) -> Node:
        """Sanitize an already built tree in place. See `sanitize_tree`."""
        return sanitize_tree(root, self._whitelist)


def sanitize(html: str | bytes, whitelist: Whitelist | None = None) -> str:
    """Sanitize `html` with `whitelist`, or a fresh `BasicWhitelist` by default."""
    return Sanitizer(whitelist if whitelist is not None else BasicWhitelist()).sanitize(html)
