from .errors import ConfigError, InvalidInputError, SanitizerError
from .node import CommentNode, DocumentFragment, ElementNode, Node, TextNode
from .presets import BASIC_PROTOCOLS, BASIC_TAGS, BasicWhitelist
from .sanitizer import Sanitizer, sanitize
from .serialize import to_html, to_test_format
from .treebuilder import parse_fragment
from .url import strip_schemes
from .whitelist import REQUIRED_TAGS, TagPolicy, Whitelist

__all__ = [
    "BASIC_PROTOCOLS",
    "BASIC_TAGS",
    "REQUIRED_TAGS",
    "BasicWhitelist",
    "CommentNode",
    "ConfigError",
    "DocumentFragment",
    "ElementNode",
    "InvalidInputError",
    "Node",
    "Sanitizer",
    "SanitizerError",
    "TagPolicy",
    "TextNode",
    "Whitelist",
    "parse_fragment",
    "sanitize",
    "strip_schemes",
    "to_html",
    "to_test_format",
]
