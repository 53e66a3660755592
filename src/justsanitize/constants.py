"""Built-in HTML tables used by the sanitizer.

Attribute names are stored lowercase; lookups lowercase their argument so
callers never have to care about the case the markup used.
"""

from __future__ import annotations

# Attributes whose mere presence means "true". Canonical value is either
# the empty string or the attribute name itself.
BOOLEAN_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "allowfullscreen",
        "allowpaymentrequest",
        "async",
        "autofocus",
        "autoplay",
        "checked",
        "controls",
        "default",
        "disabled",
        "formnovalidate",
        "hidden",
        "ismap",
        "itemscope",
        "loop",
        "multiple",
        "muted",
        "nomodule",
        "novalidate",
        "open",
        "playsinline",
        "readonly",
        "required",
        "reversed",
        "selected",
        "truespeed",
        "download",
    }
)

# Attributes that can carry a URL by definition.
URL_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "href",
        "background",
        "cite",
        "action",
        "profile",
        "longdesc",
        "classid",
        "codebase",
        "data",
        "usemap",
        "formaction",
        "icon",
        "src",
        "manifest",
        "poster",
        "srcset",
        "archive",
    }
)

# URL attributes holding a comma separated list of candidates ("url 2x, url 3x").
MULTI_URL_ATTRIBUTES: frozenset[str] = frozenset({"srcset"})

# HTML5 void elements (no closing tag)
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "basefont",
        "bgsound",
        "br",
        "col",
        "embed",
        "frame",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose text content is emitted verbatim by the serializer.
RAWTEXT_ELEMENTS: frozenset[str] = frozenset(
    {"script", "style", "xmp", "iframe", "noembed", "noframes", "plaintext"}
)

# Disallowed elements in this set are removed together with their content
# instead of being unwrapped.
DROP_CONTENT_ELEMENTS: frozenset[str] = frozenset({"script", "style"})

# Node names that are not elements. These are never looked up in a whitelist.
DOCUMENT_NODE = "#document"
FRAGMENT_NODE = "#document-fragment"
TEXT_NODE = "#text"
COMMENT_NODE = "#comment"
DOCTYPE_NODE = "!doctype"


_ASCII_LOWERCASE_TABLE = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")


def ascii_lower(name: str) -> str:
    """Lowercase ASCII letters only, leaving every other code point untouched."""
    return name.translate(_ASCII_LOWERCASE_TABLE)


def is_boolean_attribute(name: str) -> bool:
    """Return True if `name` is a built-in boolean attribute."""
    return ascii_lower(name) in BOOLEAN_ATTRIBUTES


def is_url_attribute(name: str) -> bool:
    """Return True if `name` is a built-in URL-bearing attribute."""
    return ascii_lower(name) in URL_ATTRIBUTES


def is_multi_url_attribute(name: str) -> bool:
    return ascii_lower(name) in MULTI_URL_ATTRIBUTES
