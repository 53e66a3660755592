"""Document tree consumed and mutated by the sanitizer."""

from __future__ import annotations

from collections.abc import Iterator

from .constants import COMMENT_NODE, DOCUMENT_NODE, FRAGMENT_NODE, TEXT_NODE
from .serialize import to_html


class Node:
    """A DOM-like node.

    - name: element name ("div", "svg") or one of the special node names
      "#document", "#document-fragment", "#text", "#comment", "!doctype".
    - attrs: ordered mapping of attribute name to value, for elements.
    - children: list of child nodes.
    - parent: the parent node, or None for a root.
    - namespace: None for HTML elements, "svg" or "math" for foreign ones.
    - data: text of "#text" and "#comment" nodes, doctype name for "!doctype".
    """

    __slots__ = ("attrs", "children", "data", "name", "namespace", "parent")

    name: str
    attrs: dict[str, str]
    children: list[Node]
    parent: Node | None
    namespace: str | None
    data: str | None

    def __init__(
        self,
        name: str,
        attrs: dict[str, str] | None = None,
        data: str | None = None,
        namespace: str | None = None,
    ) -> None:
        if not name:
            raise ValueError("Node name must not be empty")
        self.name = name
        self.attrs = dict(attrs) if attrs else {}
        self.children = []
        self.parent = None
        self.namespace = namespace
        self.data = data

    def __repr__(self) -> str:
        if self.name in {TEXT_NODE, COMMENT_NODE}:
            return f"Node({self.name}={(self.data or '')[:30]!r})"
        return f"Node(<{self.name}>, children={len(self.children)})"

    @property
    def is_element(self) -> bool:
        return not self.name.startswith("#") and self.name != "!doctype"

    @property
    def is_container(self) -> bool:
        return self.name in {DOCUMENT_NODE, FRAGMENT_NODE}

    def _detach(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def _check_not_ancestor(self, child: Node) -> None:
        current: Node | None = self
        while current is not None:
            if current is child:
                msg = f"Adding {child.name} as child of {self.name} would create circular reference"
                raise ValueError(msg)
            current = current.parent

    def append_child(self, child: Node) -> None:
        """Append `child`, moving it out of its current parent first.

        A `#document-fragment` child is not inserted itself; its children
        are moved over in order.
        """
        if child.name == FRAGMENT_NODE:
            end = len(self.children)
            self._splice(end, end, child)
            return
        self._check_not_ancestor(child)
        child._detach()
        child.parent = self
        self.children.append(child)

    def insert_before(self, new_node: Node, reference_node: Node | None) -> None:
        """Insert `new_node` before `reference_node`, or append when it is None."""
        if reference_node is None:
            self.append_child(new_node)
            return
        if reference_node.parent is not self:
            raise ValueError("Reference node is not a child of this node")

        if new_node.name == FRAGMENT_NODE:
            index = self.children.index(reference_node)
            self._splice(index, index, new_node)
            return

        self._check_not_ancestor(new_node)
        new_node._detach()
        index = self.children.index(reference_node)
        new_node.parent = self
        self.children.insert(index, new_node)

    def _splice(self, start: int, stop: int, fragment: Node) -> None:
        # Replace children[start:stop] with the fragment's children.
        moved = fragment.children
        for child in moved:
            self._check_not_ancestor(child)
        for child in moved:
            child.parent = self
        fragment.children = []
        self.children[start:stop] = moved

    def remove_child(self, child: Node) -> None:
        if child.parent is not self:
            raise ValueError("Node is not a child of this node")
        self.children.remove(child)
        child.parent = None

    def replace_child(self, new_node: Node, old_node: Node) -> Node:
        """Replace `old_node` with `new_node` and return `old_node`.

        Replacing with a `#document-fragment` splices the fragment's children
        into the slot `old_node` occupied, keeping their order.
        """
        if old_node.parent is not self:
            raise ValueError("Node is not a child of this node")
        if new_node is old_node:
            return old_node

        if new_node.name == FRAGMENT_NODE:
            index = self.children.index(old_node)
            self._splice(index, index + 1, new_node)
            old_node.parent = None
            return old_node

        self.insert_before(new_node, old_node)
        self.remove_child(old_node)
        return old_node

    def iter_descendants(self) -> Iterator[Node]:
        """Yield every descendant in document order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_text(self) -> str:
        """Concatenated data of all descendant text nodes."""
        return "".join(node.data or "" for node in self.iter_descendants() if node.name == TEXT_NODE)

    def to_html(self) -> str:
        return to_html(self)


class ElementNode(Node):
    __slots__ = ()

    def __init__(self, name: str, attrs: dict[str, str] | None = None, namespace: str | None = None) -> None:
        super().__init__(name, attrs=attrs, namespace=namespace)


class TextNode(Node):
    __slots__ = ()

    def __init__(self, data: str) -> None:
        super().__init__(TEXT_NODE, data=data)


class CommentNode(Node):
    __slots__ = ()

    def __init__(self, data: str) -> None:
        super().__init__(COMMENT_NODE, data=data)


class DocumentFragment(Node):
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(FRAGMENT_NODE)
