"""Whitelist policy model.

A `Whitelist` enumerates everything the sanitizer is allowed to keep: tags,
the attributes allowed on each tag, the hosts each tag may point at, the
exact values an attribute may take, and the URL schemes that survive in
URL-bearing attributes.

Tag names, attribute names and schemes are canonicalized to lowercase ASCII
at the API boundary, so callers may use any case. Attribute values and host
patterns keep the semantics described on the individual methods.

A whitelist is built once through the chaining builder methods and then
only read by `Sanitizer`. Sharing a fully configured whitelist between
threads is safe as long as nobody mutates it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .constants import ascii_lower, is_boolean_attribute, is_url_attribute
from .errors import ConfigError
from .url import match_host_parts

# Node names that are always allowed and can never be configured.
REQUIRED_TAGS: frozenset[str] = frozenset({"#document", "#text"})


@dataclass(slots=True)
class TagPolicy:
    """Per-tag rules.

    An empty `allowed_hosts` list means the tag may point at any host.
    """

    attributes: set[str] = field(default_factory=set)
    allowed_hosts: list[str] = field(default_factory=list)


def _as_list(names: str | Iterable[str] | None) -> list[str]:
    # A bare string is one name, not an iterable of characters.
    if names is None:
        return []
    if isinstance(names, str):
        return [names]
    return [str(name) for name in names]


def _canonical_protocol(protocol: str) -> str:
    protocol = ascii_lower(protocol.strip())
    if protocol.endswith(":"):
        protocol = protocol[:-1]
    return protocol


class Whitelist:
    """Mutable allow-list consumed by `Sanitizer`.

    Every builder method returns the whitelist itself so calls can be
    chained::

        whitelist = (
            Whitelist()
            .allow_tag("a", ["href", "title"])
            .set_allowed_hosts("a", ["example.com"])
            .add_protocol(["http", "https"])
        )
    """

    __slots__ = ("_protocols", "_tags", "_treat_as_boolean", "_treat_as_url", "_values")

    def __init__(
        self,
        tags: Mapping[str, Iterable[str] | None] | None = None,
        protocols: Iterable[str] | None = None,
    ) -> None:
        self._tags: dict[str, TagPolicy] = {}
        self._protocols: set[str] = set()
        self._values: dict[tuple[str, str], set[str]] = {}
        self._treat_as_url: set[str] = set()
        self._treat_as_boolean: set[str] = set()

        self.set_tags(tags or {})
        self.set_protocols(protocols or [])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tags={len(self._tags)}, protocols={sorted(self._protocols)!r})"

    # -------
    # Builder
    # -------

    def allow_tag(self, tag: str, attributes: str | Iterable[str] | None = None) -> Whitelist:
        """Allow `tag` and add `attributes` to the ones it already allows.

        Calling it again for an allowed tag keeps its attributes and clears
        its host restrictions.
        """
        if self.is_required_tag(tag):
            raise ConfigError(f"Unable to overwrite required tag: {tag}")

        key = ascii_lower(tag)
        previous = self._tags.get(key)
        allowed = set(previous.attributes) if previous is not None else set()
        allowed.update(ascii_lower(a) for a in _as_list(attributes))
        self._tags[key] = TagPolicy(attributes=allowed)
        return self

    def remove_tag(self, tags: str | Iterable[str]) -> Whitelist:
        """Remove one or more tags. Tags that are not allowed are ignored.

        Value sets configured for the tag's attributes are kept and apply
        again if the tag is allowed later.
        """
        for tag in _as_list(tags):
            self._tags.pop(ascii_lower(tag), None)
        return self

    def allow_attribute(self, tag: str, attributes: str | Iterable[str]) -> Whitelist:
        policy = self._require_tag(tag, "allow attribute(s)")
        policy.attributes.update(ascii_lower(a) for a in _as_list(attributes))
        return self

    def remove_attribute(self, tag: str, attributes: str | Iterable[str]) -> Whitelist:
        policy = self._require_tag(tag, "remove attribute(s)")
        for attr in _as_list(attributes):
            policy.attributes.discard(ascii_lower(attr))
        return self

    def set_allowed_values(self, tag: str, attribute: str, values: str | Iterable[str]) -> Whitelist:
        """Restrict `attribute` on `tag` to an exact set of values.

        An attribute whose value is not in the set is removed. Values are
        compared exactly, without case folding.
        """
        self._require_tag(tag, f"allow values on attribute `{attribute}`")
        self._values[(ascii_lower(tag), ascii_lower(attribute))] = set(_as_list(values))
        return self

    def set_allowed_hosts(self, tag: str, hosts: str | Iterable[str], merge: bool = False) -> Whitelist:
        """Restrict the hosts URL attributes on `tag` may point at.

        With `merge=False` the host list is replaced, otherwise the new
        patterns are appended. An empty list lifts the restriction.
        """
        policy = self._require_tag(tag, "allow host(s)")
        patterns = [ascii_lower(host.strip()) for host in _as_list(hosts)]
        if merge:
            policy.allowed_hosts.extend(patterns)
        else:
            policy.allowed_hosts = patterns
        return self

    def add_protocol(self, protocols: str | Iterable[str]) -> Whitelist:
        self._protocols.update(_canonical_protocol(p) for p in _as_list(protocols))
        return self

    def remove_protocol(self, protocols: str | Iterable[str]) -> Whitelist:
        for protocol in _as_list(protocols):
            self._protocols.discard(_canonical_protocol(protocol))
        return self

    def set_protocols(self, protocols: str | Iterable[str], merge: bool = False) -> Whitelist:
        formatted = {_canonical_protocol(p) for p in _as_list(protocols)}
        if merge:
            self._protocols.update(formatted)
        else:
            self._protocols = formatted
        return self

    def set_tags(self, tags: Mapping[str, Iterable[str] | None], merge: bool = False) -> Whitelist:
        """Set allowed tags from a ``{tag: [attribute, ...]}`` mapping.

        Every tag in the mapping starts with no host restriction. With
        `merge=True` tags missing from the mapping are kept, tags present in
        it are overwritten.
        """
        formatted: dict[str, TagPolicy] = {}
        for tag, attributes in tags.items():
            if self.is_required_tag(tag):
                raise ConfigError(f"Unable to overwrite required tag: {tag}")
            formatted[ascii_lower(tag)] = TagPolicy(attributes={ascii_lower(a) for a in _as_list(attributes)})

        if merge:
            self._tags.update(formatted)
        else:
            self._tags = formatted
        return self

    def treat_attributes_as_url(self, attributes: str | Iterable[str]) -> Whitelist:
        """Replace the set of custom attributes filtered like ``href``."""
        self._treat_as_url = {ascii_lower(a) for a in _as_list(attributes)}
        return self

    def treat_attributes_as_boolean(self, attributes: str | Iterable[str]) -> Whitelist:
        """Replace the set of custom attributes normalized like ``disabled``."""
        self._treat_as_boolean = {ascii_lower(a) for a in _as_list(attributes)}
        return self

    def _require_tag(self, tag: str, action: str) -> TagPolicy:
        policy = self._tags.get(ascii_lower(tag))
        if policy is None:
            raise ConfigError(f"Failed to {action} on tag `{tag}`, because the tag itself isn't allowed.")
        return policy

    # ---------
    # Accessors
    # ---------

    def allowed_tags(self) -> dict[str, TagPolicy]:
        return {
            tag: TagPolicy(attributes=set(policy.attributes), allowed_hosts=list(policy.allowed_hosts))
            for tag, policy in self._tags.items()
        }

    def allowed_attributes(self, tag: str) -> set[str]:
        policy = self._tags.get(ascii_lower(tag))
        return set(policy.attributes) if policy is not None else set()

    def allowed_hosts(self, tag: str) -> list[str]:
        policy = self._tags.get(ascii_lower(tag))
        return list(policy.allowed_hosts) if policy is not None else []

    def allowed_values(self, tag: str, attribute: str) -> set[str] | None:
        values = self._values.get((ascii_lower(tag), ascii_lower(attribute)))
        return set(values) if values is not None else None

    def protocols(self) -> set[str]:
        return set(self._protocols)

    # -------
    # Queries
    # -------

    def is_required_tag(self, tag: str) -> bool:
        return ascii_lower(tag) in REQUIRED_TAGS

    def is_tag_allowed(self, tag: str) -> bool:
        if self.is_required_tag(tag):
            return True
        return ascii_lower(tag) in self._tags

    def is_attribute_allowed(self, tag: str, attribute: str) -> bool:
        policy = self._tags.get(ascii_lower(tag))
        if policy is None:
            return False
        return ascii_lower(attribute) in policy.attributes

    def is_value_allowed(self, tag: str, attribute: str, value: str) -> bool:
        """Return True unless a value set exists for the pair and misses `value`."""
        values = self._values.get((ascii_lower(tag), ascii_lower(attribute)))
        if values is None:
            return True
        return value in values

    def is_protocol_allowed(self, protocol: str) -> bool:
        # RFC 2616 section 3.2.3: scheme comparison is case-insensitive.
        return ascii_lower(protocol) in self._protocols

    def is_host_allowed(self, tag: str, host: str) -> bool:
        """Return True if `host` matches one of the patterns set on `tag`.

        Matching is label-wise from the top-level domain outward, so the
        pattern ``example.com`` allows ``example.com`` and
        ``cdn.example.com`` but not ``badexample.com``. A tag without
        patterns allows every host; a tag that is not allowed allows none.
        """
        policy = self._tags.get(ascii_lower(tag))
        if policy is None:
            return False
        if not policy.allowed_hosts:
            return True

        host_parts = ascii_lower(host).split(".")[::-1]
        return any(match_host_parts(host_parts, pattern.split(".")[::-1]) for pattern in policy.allowed_hosts)

    def is_url_attribute(self, attribute: str) -> bool:
        """Built-in URL attribute, or one registered via `treat_attributes_as_url`."""
        return is_url_attribute(attribute) or ascii_lower(attribute) in self._treat_as_url

    def is_boolean_attribute(self, attribute: str) -> bool:
        """Built-in boolean attribute, or one registered via `treat_attributes_as_boolean`."""
        return is_boolean_attribute(attribute) or ascii_lower(attribute) in self._treat_as_boolean
