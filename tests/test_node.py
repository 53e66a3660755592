from __future__ import annotations

import unittest

from justsanitize.node import CommentNode, DocumentFragment, ElementNode, Node, TextNode


def _names(node: Node) -> list[str]:
    return [child.name if child.name != "#text" else f"'{child.data}'" for child in node.children]


class TestNode(unittest.TestCase):
    def test_empty_name_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Node("")

    def test_kinds(self) -> None:
        assert ElementNode("p").is_element
        assert not TextNode("x").is_element
        assert not CommentNode("x").is_element
        assert not Node("!doctype").is_element
        assert DocumentFragment().is_container
        assert Node("#document").is_container
        assert not ElementNode("div").is_container

    def test_attrs_are_copied(self) -> None:
        attrs = {"id": "x"}
        node = ElementNode("p", attrs)
        node.attrs["class"] = "y"
        assert attrs == {"id": "x"}

    def test_append_child_moves_node(self) -> None:
        first = ElementNode("div")
        second = ElementNode("div")
        child = ElementNode("span")
        first.append_child(child)
        second.append_child(child)
        assert first.children == []
        assert second.children == [child]
        assert child.parent is second

    def test_append_child_rejects_cycles(self) -> None:
        outer = ElementNode("div")
        inner = ElementNode("span")
        outer.append_child(inner)
        with self.assertRaises(ValueError):
            inner.append_child(outer)
        with self.assertRaises(ValueError):
            outer.append_child(outer)

    def test_append_fragment_moves_its_children(self) -> None:
        parent = ElementNode("p")
        fragment = DocumentFragment()
        fragment.append_child(TextNode("a"))
        fragment.append_child(ElementNode("b"))
        parent.append_child(fragment)
        assert _names(parent) == ["'a'", "b"]
        assert fragment.children == []
        assert all(child.parent is parent for child in parent.children)

    def test_insert_before(self) -> None:
        parent = ElementNode("p")
        last = TextNode("z")
        parent.append_child(last)
        parent.insert_before(ElementNode("b"), last)
        parent.insert_before(TextNode("end"), None)
        assert _names(parent) == ["b", "'z'", "'end'"]

    def test_insert_before_requires_child_reference(self) -> None:
        with self.assertRaises(ValueError):
            ElementNode("p").insert_before(TextNode("x"), TextNode("y"))

    def test_remove_child(self) -> None:
        parent = ElementNode("p")
        child = TextNode("x")
        parent.append_child(child)
        parent.remove_child(child)
        assert parent.children == []
        assert child.parent is None
        with self.assertRaises(ValueError):
            parent.remove_child(child)

    def test_replace_child_with_fragment_splices_in_place(self) -> None:
        parent = ElementNode("div")
        parent.append_child(TextNode("a"))
        old = ElementNode("span")
        parent.append_child(old)
        parent.append_child(TextNode("z"))

        fragment = DocumentFragment()
        fragment.append_child(ElementNode("b"))
        fragment.append_child(ElementNode("i"))

        assert parent.replace_child(fragment, old) is old
        assert _names(parent) == ["'a'", "b", "i", "'z'"]
        assert old.parent is None

    def test_replace_child_with_node(self) -> None:
        parent = ElementNode("div")
        old = ElementNode("span")
        parent.append_child(old)
        new = ElementNode("em")
        parent.replace_child(new, old)
        assert parent.children == [new]
        assert new.parent is parent

    def test_iter_descendants_in_document_order(self) -> None:
        root = Node("#document")
        div = ElementNode("div")
        root.append_child(div)
        div.append_child(TextNode("a"))
        b = ElementNode("b")
        div.append_child(b)
        b.append_child(TextNode("c"))
        root.append_child(TextNode("d"))
        assert [node.name for node in root.iter_descendants()] == ["div", "#text", "b", "#text", "#text"]
        assert root.to_text() == "acd"

    def test_repr(self) -> None:
        assert repr(TextNode("hello")) == "Node(#text='hello')"
        assert repr(ElementNode("p")) == "Node(<p>, children=0)"

    def test_to_html(self) -> None:
        p = ElementNode("p", {"class": "x"})
        p.append_child(TextNode("a < b"))
        assert p.to_html() == '<p class="x">a &lt; b</p>'
