from copy import deepcopy
from typing import Any, Iterator, List, Optional, Sequence, Tuple, overload

from lxml import etree

from lxml_typed.exceptions import (
    ConversionError,
    MissingAttributeError,
    StructureError,
)
from lxml_typed.typing import AttributeValue
from lxml_typed.utils import (
    INT_BITS,
    LONG_BITS,
    detach_element,
    format_attribute_value,
    parse_bool,
    parse_float,
    parse_integer,
)


_Element = etree._Element


# classifications of an element's content
EMPTY, TEXT, CHILDREN, MIXED = 0, 1, 2, 3


def _is_tag(element: _Element) -> bool:
    # comments, processing instructions and entities carry a factory as tag
    return isinstance(element.tag, str)


def _text_fragments(element: _Element) -> Iterator[str]:
    if element.text is not None:
        yield element.text
    for child in element:
        if child.tail is not None:
            yield child.tail


def classify_content(element: _Element) -> int:
    has_text = next(_text_fragments(element), None) is not None
    has_children = any(_is_tag(x) for x in element)
    if has_text and has_children:
        return MIXED
    elif has_text:
        return TEXT
    elif has_children:
        return CHILDREN
    return EMPTY


class TagNode:
    """ A handle to one element of a document's tree.

        Instances don't own anything, they are created anew whenever a node is
        returned by navigating or mutating a tree, so several instances may refer to
        the same element. Comparisons between them are therefore structural, see
        :meth:`TagNode.equals`.

        An element holds either child nodes or text content, the mutating methods
        refuse to mix them.
    """

    __slots__ = ("_etree_obj",)

    def __init__(self, etree_element: _Element):
        self._etree_obj = etree_element

    def __contains__(self, name: str) -> bool:
        """ Tests whether the node has an attribute with the given name. """
        return self.has_attribute(name)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TagNode):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore

    def __iter__(self) -> Iterator["TagNode"]:
        return self.children()

    def __len__(self) -> int:
        return self.child_count()

    def __str__(self) -> str:
        attributes = " ".join(f"{k}={v}" for k, v in self._etree_obj.attrib.items())
        result = f"<{self.name}"
        if attributes:
            result += " " + attributes
        return result + ">"

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}('{self.name}', "
            f" {self.attributes}) [{hex(id(self._etree_obj))}]>"
        )

    # structure

    @overload
    def add_child(self, node: str) -> "TagNode":
        ...

    @overload  # noqa: F811
    def add_child(self, node: "TagNode", copy: bool = False) -> "TagNode":
        ...

    def add_child(self, node, copy=False):  # noqa: F811
        """ Appends a child node and returns it.

            :param node: Either the name of a new, empty node or an existing node.
            :param copy: An existing node is moved from its current position unless
                         this is :obj:`True`, then a deep copy of it is appended.
        """
        if self.has_text():
            raise StructureError(
                f"Can't add a child to <{self.name}> as it holds text content."
            )

        if isinstance(node, str):
            element = self._etree_obj.makeelement(node)

        elif isinstance(node, TagNode):
            if copy:
                element = deepcopy(node._etree_obj)
                element.tail = None
            else:
                element = node._etree_obj
                self.__validate_move(element)
                detach_element(element)

        else:
            raise TypeError(f"Can't add a child from {node!r}.")

        self._etree_obj.append(element)
        return TagNode(element)

    def __validate_move(self, element: _Element):
        if element is self._etree_obj or any(
            x is element for x in self._etree_obj.iterancestors()
        ):
            raise StructureError("A node can't be moved into its own subtree.")
        # removed nodes have no parent either, but aren't their tree's root
        if element.getparent() is None and element.getroottree().getroot() is element:
            raise StructureError(
                "A document's root node can't be moved, add a copy of it instead."
            )

    def child_count(self) -> int:
        """ The number of direct child nodes, text and other node types are not
            counted. """
        return sum(1 for _ in self.children())

    def children(self) -> Iterator["TagNode"]:
        """ Yields the direct child nodes in document order. Text, comments and
            processing instructions are skipped.

            Each call returns an independent iterator that follows the current state
            of the tree while it advances. Changing the children of this node while
            iterating is not supported.
        """
        current = self._etree_obj[0] if len(self._etree_obj) else None
        while current is not None:
            if _is_tag(current):
                yield TagNode(current)
            current = current.getnext()

    @property
    def name(self) -> str:
        return self._etree_obj.tag

    @property
    def parent(self) -> Optional["TagNode"]:
        etree_parent = self._etree_obj.getparent()
        if etree_parent is None:
            return None
        return TagNode(etree_parent)

    def remove_child(self, child: "TagNode"):
        """ Removes a direct child node together with its subtree. """
        if child._etree_obj.getparent() is not self._etree_obj:
            raise StructureError(
                f"<{child.name}> is not a child of <{self.name}>, it can't be removed."
            )
        detach_element(child._etree_obj)

    # text content

    def get_text(self) -> str:
        """ Returns the node's text content or an empty string if there is none.
            Use :meth:`TagNode.has_text` to tell both cases apart. """
        return next(_text_fragments(self._etree_obj), "")

    def has_text(self) -> bool:
        return next(_text_fragments(self._etree_obj), None) is not None

    def remove_text(self):
        """ Removes all text content, whether the element's own text or text between
            any of its child nodes. """
        element = self._etree_obj
        element.text = None
        for child in element:
            child.tail = None

    def set_text(self, content: str):
        """ Replaces any text content with the given one. """
        if classify_content(self._etree_obj) in (CHILDREN, MIXED):
            raise StructureError(
                f"Can't set text content of <{self.name}> as it has child nodes."
            )
        self.remove_text()
        self._etree_obj.text = content

    # attributes

    @property
    def attributes(self) -> dict:
        """ A copy of the node's attributes. """
        return dict(self._etree_obj.attrib)

    def get_bool_attribute(self, name: str) -> bool:
        """ Accepts ``true`` and ``false``, regardless of case and surrounding
            whitespace. """
        return parse_bool(self.get_string_attribute(name))

    def get_double_attribute(self, name: str) -> float:
        return parse_float(self.get_string_attribute(name))

    def get_enum_attribute(self, name: str, choices: Sequence[str]) -> int:
        """ Returns the position of the attribute's value in ``choices``. """
        value = self.get_string_attribute(name)
        try:
            return list(choices).index(value)
        except ValueError as e:
            raise ConversionError(
                f"Invalid value for {self.name}.{name}: `{value}`"
            ) from e

    def get_float_attribute(self, name: str) -> float:
        # there's no distinct single precision type
        return parse_float(self.get_string_attribute(name))

    def get_int_attribute(self, name: str, base: int = 10) -> int:
        """ Parses a signed 32 bit integer. """
        return parse_integer(self.get_string_attribute(name), base, INT_BITS)

    def get_long_attribute(self, name: str, base: int = 10) -> int:
        """ Parses a signed 64 bit integer. """
        return parse_integer(self.get_string_attribute(name), base, LONG_BITS)

    def get_string_attribute(self, name: str) -> str:
        value = self._etree_obj.get(name)
        if not value:
            raise MissingAttributeError(name)
        return value

    def has_attribute(self, name: str) -> bool:
        return name in self._etree_obj.attrib

    def remove_attribute(self, name: str):
        self._etree_obj.attrib.pop(name, None)

    def set_attribute(self, name: str, value: AttributeValue):
        """ Stores a value's string representation, booleans are written as ``true``
            and ``false``. """
        self._etree_obj.set(name, format_attribute_value(value))

    # comparison & serialization

    def dump(self, format: bool = False) -> str:
        """ Serializes the subtree of this node.

            :param format: Indents nested nodes with two spaces.
        """
        return etree.tostring(
            self._etree_obj, encoding="unicode", pretty_print=format, with_tail=False
        )

    def equals(self, other: "TagNode") -> bool:
        """ Tests whether both nodes' subtrees are equal regarding names, attributes,
            text content and the order of child nodes. """
        pending: List[Tuple[_Element, _Element]] = [
            (self._etree_obj, other._etree_obj)
        ]
        while pending:
            this, that = pending.pop()
            if (
                this.tag != that.tag
                or dict(this.attrib) != dict(that.attrib)
                or "".join(_text_fragments(this)) != "".join(_text_fragments(that))
            ):
                return False
            these = [x for x in this if _is_tag(x)]
            those = [x for x in that if _is_tag(x)]
            if len(these) != len(those):
                return False
            pending.extend(zip(these, those))
        return True


__all__ = (TagNode.__name__, classify_content.__name__)
