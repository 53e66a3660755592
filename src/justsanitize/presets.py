"""Ready-made whitelists.

`BasicWhitelist` covers the markup a typical WYSIWYG editor produces. The
tag list follows the WordPress post editor.
"""

from __future__ import annotations

from .whitelist import Whitelist

_ALIGN_DIR_LANG = ["align", "dir", "lang", "xml:lang"]
_TABLE_SECTION = ["align", "char", "charoff", "valign"]

BASIC_TAGS: dict[str, list[str]] = {
    "address": [],
    "a": ["href", "rel", "rev", "name", "target", "title", "download"],
    "abbr": [],
    "acronym": [],
    "area": ["alt", "coords", "href", "nohref", "shape", "target"],
    "article": list(_ALIGN_DIR_LANG),
    "aside": list(_ALIGN_DIR_LANG),
    "audio": ["autoplay", "controls", "loop", "muted", "preload", "src"],
    "b": [],
    "bdo": ["dir"],
    "big": [],
    "blockquote": ["cite", "lang", "xml:lang"],
    "br": [],
    "button": ["disabled", "name", "type", "value"],
    "caption": ["align"],
    "cite": ["dir", "lang"],
    "code": [],
    "col": ["align", "char", "charoff", "span", "dir", "valign", "width"],
    "colgroup": ["align", "char", "charoff", "span", "valign", "width"],
    "del": ["datetime"],
    "dd": [],
    "dfn": [],
    "details": ["align", "dir", "lang", "open", "xml:lang"],
    "div": list(_ALIGN_DIR_LANG),
    "dl": [],
    "dt": [],
    "em": [],
    "fieldset": [],
    "figure": list(_ALIGN_DIR_LANG),
    "figcaption": list(_ALIGN_DIR_LANG),
    "font": ["color", "face", "size"],
    "footer": list(_ALIGN_DIR_LANG),
    "h1": ["align"],
    "h2": ["align"],
    "h3": ["align"],
    "h4": ["align"],
    "h5": ["align"],
    "h6": ["align"],
    "header": list(_ALIGN_DIR_LANG),
    "hgroup": list(_ALIGN_DIR_LANG),
    "hr": ["align", "noshade", "size", "width"],
    "i": [],
    "img": ["alt", "align", "border", "height", "hspace", "longdesc", "vspace", "src", "usemap", "width"],
    "ins": ["datetime", "cite"],
    "kbd": [],
    "label": ["for"],
    "legend": ["align"],
    "li": ["align", "value"],
    "map": ["name"],
    "mark": [],
    "menu": ["type"],
    "nav": list(_ALIGN_DIR_LANG),
    "p": list(_ALIGN_DIR_LANG),
    "pre": ["width"],
    "q": ["cite"],
    "s": [],
    "samp": [],
    "span": ["dir", "align", "lang", "xml:lang"],
    "section": list(_ALIGN_DIR_LANG),
    "small": [],
    "strike": [],
    "strong": [],
    "sub": [],
    "summary": list(_ALIGN_DIR_LANG),
    "sup": [],
    "source": ["src", "type", "sizes", "srcset", "media"],
    "table": ["align", "bgcolor", "border", "cellpadding", "cellspacing", "dir", "rules", "summary", "width"],
    "tbody": list(_TABLE_SECTION),
    "td": [
        "abbr",
        "align",
        "axis",
        "bgcolor",
        "char",
        "charoff",
        "colspan",
        "dir",
        "headers",
        "height",
        "nowrap",
        "rowspan",
        "scope",
        "valign",
        "width",
    ],
    "textarea": ["cols", "rows", "disabled", "name", "readonly"],
    "tfoot": list(_TABLE_SECTION),
    "th": [
        "abbr",
        "align",
        "axis",
        "bgcolor",
        "char",
        "charoff",
        "colspan",
        "headers",
        "height",
        "nowrap",
        "rowspan",
        "scope",
        "valign",
        "width",
    ],
    "thead": list(_TABLE_SECTION),
    "tr": ["align", "bgcolor", "char", "charoff", "valign"],
    "track": ["default", "kind", "label", "src", "srclang"],
    "tt": [],
    "u": [],
    "ul": ["type"],
    "ol": ["start", "type", "reversed"],
    "var": [],
    "video": ["autoplay", "controls", "height", "loop", "muted", "poster", "preload", "src", "width"],
}

BASIC_PROTOCOLS: list[str] = ["http", "https", "ftp", "//", "mailto", "data"]


class BasicWhitelist(Whitelist):
    """Whitelist preloaded with `BASIC_TAGS` and `BASIC_PROTOCOLS`.

    It is an ordinary `Whitelist` afterwards and can be adjusted with the
    builder methods.
    """

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__()
        self.set_tags(self.basic_tags())
        self.set_protocols(self.basic_protocols())

    @classmethod
    def basic_tags(cls) -> dict[str, list[str]]:
        """Return a fresh copy of the basic tag table."""
        return {tag: list(attributes) for tag, attributes in BASIC_TAGS.items()}

    @classmethod
    def basic_protocols(cls) -> list[str]:
        return list(BASIC_PROTOCOLS)
