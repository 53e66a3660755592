"""URL filtering for URL-bearing attributes.

Two independent mechanisms are applied to every URL value:

- Host filtering: the host is extracted the way a browser would read it
  and checked against the tag's host patterns. A disallowed host empties
  the value.
- Scheme stripping: disallowed scheme prefixes are peeled off the raw string
  until nothing changes. This works on raw prefixes on purpose, it does not
  trust any URL parser's idea of what the scheme is.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from .constants import ascii_lower

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .whitelist import Whitelist

logger = logging.getLogger(__name__)

# ASCII whitespace and control characters are ignored by browsers inside a
# scheme ("jav\tascript:"), so they are ignored when checking one too.
_SCHEME_NOISE_RE = re.compile(r"[\x00-\x20\x7f]+")

_SRCSET_WHITESPACE = " \t\n\f\r"

# WHATWG URL parsing details used by `extract_host`.
_C0_CONTROL_OR_SPACE = "".join(chr(code) for code in range(0x21))
_URL_TAB_NEWLINE_RE = re.compile(r"[\t\n\r]+")
_URL_SCHEME_RE = re.compile(r"([A-Za-z][A-Za-z0-9+.\-]*):")
_SPECIAL_SCHEMES = frozenset({"ftp", "http", "https", "ws", "wss"})


def canonical_scheme(scheme: str) -> str:
    """Lowercase `scheme` and drop embedded whitespace and control characters."""
    return ascii_lower(_SCHEME_NOISE_RE.sub("", scheme))


def strip_schemes(uri: str, is_protocol_allowed: Callable[[str], bool]) -> str:
    """Iteratively remove disallowed scheme prefixes from `uri`.

    ``javascript:http://x`` first loses ``javascript:`` and is then checked
    again as ``http://x``. A colon preceded by ``/``, ``?`` or ``#`` cannot
    end a scheme, so ``foo/bar:baz`` is left alone as a relative URL.
    """
    while True:
        before = uri
        colon = uri.find(":")
        if colon > 0:
            scheme = uri[:colon]
            if "/" in scheme or "?" in scheme or "#" in scheme:
                break
            if not is_protocol_allowed(canonical_scheme(scheme)):
                uri = uri[colon + 1 :]
        if uri == before:
            return uri
    return uri


def extract_host(value: str) -> str | None:
    """Return the lowercased host a browser would load `value` from.

    Follows the WHATWG URL rules that matter for host checks: backslashes
    count as slashes, tabs and newlines are ignored, and for the special
    schemes (and scheme-relative values) any run of slashes after the
    scheme starts the authority, so ``https:\\\\host``, ``https:host`` and
    ``/\\host`` all yield ``host``. Returns None when there is no host.
    """
    value = _URL_TAB_NEWLINE_RE.sub("", value.strip(_C0_CONTROL_OR_SPACE))
    match = _URL_SCHEME_RE.match(value)
    if match is not None and ascii_lower(match.group(1)) not in _SPECIAL_SCHEMES:
        authority = value
    else:
        # Relative values resolve against an http(s) page, so they follow
        # the special-scheme rules too.
        rest = value[match.end() :] if match is not None else value
        rest = rest.replace("\\", "/")
        if match is None and not rest.startswith("//"):
            return None
        authority = "//" + rest.lstrip("/")

    try:
        host = urlsplit(authority).hostname
    except ValueError:
        # Not a URL (e.g. an unbalanced IPv6 bracket)
        return None
    return ascii_lower(unquote(host)) if host else None


def match_host_parts(host_parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    """Compare reversed label lists, pattern labels first.

    Both sequences start at the top-level domain: ``["com", "example", "cdn"]``
    matches the pattern ``["com", "example"]``.
    """
    if len(pattern_parts) > len(host_parts):
        return False
    return all(host_parts[i] == label for i, label in enumerate(pattern_parts))


def filter_url(whitelist: Whitelist, tag: str, value: str) -> str:
    """Filter a single URL value found on element `tag`.

    Returns the empty string when the URL points at a host the tag may not
    reference, otherwise the value with disallowed schemes stripped.
    """
    host = extract_host(value)
    if host is not None and not whitelist.is_host_allowed(tag, host):
        logger.debug("Emptied URL on <%s>: host %r is not allowed", tag, host)
        return ""

    stripped = strip_schemes(value, whitelist.is_protocol_allowed)
    if stripped != value:
        # Stripping can expose a new authority ("javascript:https://host").
        host = extract_host(stripped)
        if host is not None and not whitelist.is_host_allowed(tag, host):
            logger.debug("Emptied URL on <%s>: host %r is not allowed", tag, host)
            return ""
    return stripped


def parse_srcset(value: str) -> list[tuple[str, str]]:
    """Split a srcset value into ``(url, descriptors)`` candidates.

    Follows the HTML image candidate rules closely enough for filtering: a
    URL is a run of non-whitespace characters with trailing commas removed,
    and descriptors run up to the next comma outside parentheses.
    """
    candidates: list[tuple[str, str]] = []
    pos = 0
    length = len(value)
    while pos < length:
        while pos < length and (value[pos] in _SRCSET_WHITESPACE or value[pos] == ","):
            pos += 1
        if pos >= length:
            break

        start = pos
        while pos < length and value[pos] not in _SRCSET_WHITESPACE:
            pos += 1
        url = value[start:pos]

        if url.endswith(","):
            candidates.append((url.rstrip(","), ""))
            continue

        start = pos
        depth = 0
        while pos < length:
            ch = value[pos]
            if ch == "(":
                depth += 1
            elif ch == ")" and depth:
                depth -= 1
            elif ch == "," and not depth:
                break
            pos += 1
        candidates.append((url, " ".join(value[start:pos].split())))
        pos += 1
    return candidates


def filter_srcset(whitelist: Whitelist, tag: str, value: str) -> str:
    """Filter every candidate URL of a srcset value.

    Candidates whose URL ends up empty are dropped; the rest are re-joined
    with ``", "``.
    """
    kept: list[str] = []
    for url, descriptors in parse_srcset(value):
        url = filter_url(whitelist, tag, url)
        # A stripped scheme can leave leading commas, which would split the
        # candidate differently on the next parse.
        while url.startswith(","):
            url = filter_url(whitelist, tag, url.lstrip(","))
        if not url:
            continue
        kept.append(f"{url} {descriptors}" if descriptors else url)
    return ", ".join(kept)
