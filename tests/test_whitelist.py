from __future__ import annotations

import unittest

from justsanitize import BASIC_PROTOCOLS, BASIC_TAGS, BasicWhitelist, ConfigError, TagPolicy, Whitelist


class TestWhitelistBuilder(unittest.TestCase):
    def test_empty_whitelist_only_allows_required_tags(self) -> None:
        whitelist = Whitelist()
        assert whitelist.is_tag_allowed("#document")
        assert whitelist.is_tag_allowed("#text")
        assert not whitelist.is_tag_allowed("p")
        assert whitelist.protocols() == set()

    def test_constructor_applies_tags_and_protocols(self) -> None:
        whitelist = Whitelist({"p": ["class"], "br": None}, ["HTTPS:"])
        assert whitelist.is_attribute_allowed("p", "class")
        assert whitelist.is_tag_allowed("br")
        assert whitelist.protocols() == {"https"}

    def test_builder_methods_chain(self) -> None:
        whitelist = Whitelist()
        result = (
            whitelist.allow_tag("a", ["href"])
            .allow_attribute("a", "title")
            .set_allowed_hosts("a", ["example.com"])
            .set_allowed_values("a", "title", ["x"])
            .add_protocol("https")
        )
        assert result is whitelist

    def test_allow_tag_is_case_insensitive(self) -> None:
        whitelist = Whitelist().allow_tag("DIV", ["ID", "Class"])
        assert whitelist.is_tag_allowed("div")
        assert whitelist.is_tag_allowed("Div")
        assert whitelist.is_attribute_allowed("div", "id")
        assert whitelist.is_attribute_allowed("DIV", "CLASS")

    def test_allow_tag_adds_attributes_and_clears_hosts(self) -> None:
        whitelist = Whitelist().allow_tag("img", ["src", "alt"]).set_allowed_hosts("img", ["example.com"])
        whitelist.allow_tag("img", "width")
        assert whitelist.allowed_attributes("img") == {"src", "alt", "width"}
        assert whitelist.allowed_hosts("img") == []

    def test_allow_tag_twice_merges_attributes(self) -> None:
        whitelist = Whitelist().allow_tag("a", ["href"]).allow_tag("A", ["title"])
        assert whitelist.allowed_attributes("a") == {"href", "title"}
        whitelist.allow_tag("a")
        assert whitelist.allowed_attributes("a") == {"href", "title"}

    def test_allow_required_tag_fails(self) -> None:
        with self.assertRaises(ConfigError):
            Whitelist().allow_tag("#text")
        with self.assertRaises(ConfigError):
            Whitelist().allow_tag("#DOCUMENT")

    def test_set_tags_rejects_required_tags(self) -> None:
        with self.assertRaises(ConfigError):
            Whitelist().set_tags({"p": [], "#document": []})

    def test_remove_tag_accepts_one_or_many_and_ignores_missing(self) -> None:
        whitelist = Whitelist({"a": [], "b": [], "i": []})
        whitelist.remove_tag("a").remove_tag(["b", "nope"])
        assert not whitelist.is_tag_allowed("a")
        assert not whitelist.is_tag_allowed("b")
        assert whitelist.is_tag_allowed("i")

    def test_remove_tag_keeps_value_sets(self) -> None:
        whitelist = Whitelist({"a": ["title"]}).set_allowed_values("a", "title", ["x"])
        whitelist.remove_tag("a")
        assert whitelist.allowed_values("a", "title") == {"x"}
        whitelist.allow_tag("a", ["title"])
        assert not whitelist.is_value_allowed("a", "title", "y")
        assert whitelist.is_value_allowed("a", "title", "x")

    def test_attribute_operations_require_allowed_tag(self) -> None:
        whitelist = Whitelist()
        with self.assertRaises(ConfigError) as ctx:
            whitelist.allow_attribute("img", "src")
        assert "img" in str(ctx.exception)
        with self.assertRaises(ConfigError):
            whitelist.remove_attribute("img", "src")
        with self.assertRaises(ConfigError):
            whitelist.set_allowed_values("img", "alt", ["x"])
        with self.assertRaises(ConfigError):
            whitelist.set_allowed_hosts("img", ["example.com"])

    def test_config_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            Whitelist().allow_attribute("p", "id")

    def test_allow_and_remove_attribute(self) -> None:
        whitelist = Whitelist({"img": ["src"]})
        whitelist.allow_attribute("img", ["data-src", "ALT"])
        assert whitelist.allowed_attributes("img") == {"src", "data-src", "alt"}
        whitelist.remove_attribute("img", "src").remove_attribute("img", "missing")
        assert whitelist.allowed_attributes("img") == {"data-src", "alt"}

    def test_set_allowed_hosts_replace_and_merge(self) -> None:
        whitelist = Whitelist({"img": ["src"]})
        whitelist.set_allowed_hosts("img", ["a.com"])
        whitelist.set_allowed_hosts("img", "b.com", merge=True)
        assert whitelist.allowed_hosts("img") == ["a.com", "b.com"]
        whitelist.set_allowed_hosts("img", ["c.com"])
        assert whitelist.allowed_hosts("img") == ["c.com"]
        whitelist.set_allowed_hosts("img", [])
        assert whitelist.allowed_hosts("img") == []

    def test_protocol_operations(self) -> None:
        whitelist = Whitelist()
        whitelist.add_protocol(["HTTP", "https:"]).add_protocol("//")
        assert whitelist.protocols() == {"http", "https", "//"}
        whitelist.remove_protocol("HTTPS")
        assert whitelist.protocols() == {"http", "//"}
        whitelist.set_protocols(["mailto"], merge=True)
        assert whitelist.protocols() == {"http", "//", "mailto"}
        whitelist.set_protocols(["ftp"])
        assert whitelist.protocols() == {"ftp"}

    def test_set_tags_merge(self) -> None:
        whitelist = Whitelist({"p": ["id"], "b": []})
        whitelist.set_tags({"p": ["class"], "i": []}, merge=True)
        assert whitelist.allowed_attributes("p") == {"class"}
        assert whitelist.is_tag_allowed("b")
        assert whitelist.is_tag_allowed("i")
        whitelist.set_tags({"u": []})
        assert not whitelist.is_tag_allowed("p")
        assert whitelist.is_tag_allowed("u")

    def test_treat_attributes_as_url_and_boolean_replace(self) -> None:
        whitelist = Whitelist()
        whitelist.treat_attributes_as_url(["data-src", "data-href"])
        whitelist.treat_attributes_as_url("data-src")
        assert whitelist.is_url_attribute("data-src")
        assert not whitelist.is_url_attribute("data-href")
        assert whitelist.is_url_attribute("href")

        whitelist.treat_attributes_as_boolean("Data-Flag")
        assert whitelist.is_boolean_attribute("data-flag")
        assert whitelist.is_boolean_attribute("disabled")
        assert not whitelist.is_boolean_attribute("class")

    def test_accessors_return_copies(self) -> None:
        whitelist = Whitelist({"a": ["href"]}, ["http"])
        whitelist.allowed_attributes("a").add("onclick")
        whitelist.protocols().add("javascript")
        whitelist.allowed_tags()["a"].attributes.add("onclick")
        assert not whitelist.is_attribute_allowed("a", "onclick")
        assert not whitelist.is_protocol_allowed("javascript")

    def test_allowed_tags_snapshot(self) -> None:
        whitelist = Whitelist({"a": ["href"]}).set_allowed_hosts("a", ["example.com"])
        assert whitelist.allowed_tags() == {"a": TagPolicy(attributes={"href"}, allowed_hosts=["example.com"])}


class TestWhitelistQueries(unittest.TestCase):
    def test_is_attribute_allowed_on_missing_tag(self) -> None:
        assert not Whitelist().is_attribute_allowed("a", "href")

    def test_is_value_allowed(self) -> None:
        whitelist = Whitelist({"a": ["title", "rel"]}).set_allowed_values("a", "title", ["one", "two"])
        assert whitelist.is_value_allowed("a", "title", "one")
        assert not whitelist.is_value_allowed("a", "title", "four")
        # Values are compared exactly
        assert not whitelist.is_value_allowed("a", "title", "ONE")
        # No value set means anything goes
        assert whitelist.is_value_allowed("a", "rel", "nofollow")

    def test_is_protocol_allowed_is_case_insensitive(self) -> None:
        whitelist = Whitelist(protocols=["https"])
        assert whitelist.is_protocol_allowed("HTTPS")
        assert not whitelist.is_protocol_allowed("http")

    def test_host_matching_by_label_suffix(self) -> None:
        whitelist = Whitelist({"img": ["src"]}).set_allowed_hosts("img", ["example.com"])
        assert whitelist.is_host_allowed("img", "example.com")
        assert whitelist.is_host_allowed("img", "a.b.example.com")
        assert not whitelist.is_host_allowed("img", "badexample.com")
        assert not whitelist.is_host_allowed("img", "com")
        assert not whitelist.is_host_allowed("img", "example.org")

    def test_host_matching_is_case_insensitive(self) -> None:
        whitelist = Whitelist({"img": ["src"]}).set_allowed_hosts("img", ["Example.COM"])
        assert whitelist.is_host_allowed("img", "CDN.example.com")

    def test_any_pattern_may_match(self) -> None:
        whitelist = Whitelist({"img": ["src"]}).set_allowed_hosts("img", ["a.com", "b.org"])
        assert whitelist.is_host_allowed("img", "x.b.org")

    def test_empty_host_list_allows_any_host(self) -> None:
        assert Whitelist({"img": ["src"]}).is_host_allowed("img", "anything.example")

    def test_host_on_disallowed_tag(self) -> None:
        assert not Whitelist().is_host_allowed("img", "example.com")

    def test_repr(self) -> None:
        assert repr(Whitelist({"p": []}, ["https"])) == "Whitelist(tags=1, protocols=['https'])"


class TestBasicWhitelist(unittest.TestCase):
    def test_protocols(self) -> None:
        assert BasicWhitelist.basic_protocols() == ["http", "https", "ftp", "//", "mailto", "data"]
        assert BasicWhitelist().protocols() == set(BASIC_PROTOCOLS)

    def test_tag_table(self) -> None:
        tags = BasicWhitelist.basic_tags()
        assert len(tags) == 81
        assert list(tags)[:4] == ["address", "a", "abbr", "acronym"]
        assert tags["a"] == ["href", "rel", "rev", "name", "target", "title", "download"]
        assert tags["source"] == ["src", "type", "sizes", "srcset", "media"]
        assert tags["h5"] == ["align"]
        assert tags["span"] == ["dir", "align", "lang", "xml:lang"]
        assert "script" not in tags
        assert "style" not in tags

    def test_basic_tags_returns_copy(self) -> None:
        BasicWhitelist.basic_tags()["a"].append("onclick")
        assert "onclick" not in BASIC_TAGS["a"]

    def test_preset_is_a_regular_whitelist(self) -> None:
        whitelist = BasicWhitelist()
        assert isinstance(whitelist, Whitelist)
        assert whitelist.is_attribute_allowed("img", "src")
        assert not whitelist.is_attribute_allowed("h5", "class")
        assert whitelist.is_tag_allowed("div")
        whitelist.allow_attribute("img", "data-src")
        assert whitelist.is_attribute_allowed("img", "data-src")
        # Other instances are unaffected
        assert not BasicWhitelist().is_attribute_allowed("img", "data-src")
