import logging
from io import TextIOBase
from pathlib import Path
from typing import IO, Any, Optional

from lxml import etree

from lxml_typed.exceptions import (
    ConversionError,
    MissingAttributeError,
    ParseError,
    SerializeError,
    StructureError,
    XMLError,
)
from lxml_typed.loaders import configured_loaders
from lxml_typed.nodes import TagNode
from lxml_typed.parser import DEFAULT_PARSER_OPTIONS, ParserOptions, create_parser
from lxml_typed.typing import Destination


logger = logging.getLogger(__name__)


# api


class Document:
    """ This class represents an XML document and owns its tree.

        Without a source an empty document is created whose root must be added with
        :meth:`Document.add_root`. A source can be a :class:`pathlib.Path`, a file
        name, a stream or a string or :class:`bytes` that contain XML.

        :param source: Where to load the document from.
        :param validate: Validates the document against its DTD while parsing.
        :param parser_options: Further configuration of the parser.
    """

    def __init__(
        self,
        source: Any = None,
        validate: bool = False,
        parser_options: ParserOptions = DEFAULT_PARSER_OPTIONS,
    ):
        self._tree: Optional[etree._ElementTree] = None

        if source is None:
            return

        parser = create_parser(parser_options, validate=validate)
        loaded_tree: Optional[etree._ElementTree] = None

        try:
            for loader in configured_loaders:
                loaded_tree = loader(source, parser)
                if loaded_tree is not None:
                    break
        except (etree.LxmlError, OSError, ValueError) as e:
            raise ParseError(f"Couldn't load {source!r:.80}: {e}") from e

        if loaded_tree is None:
            raise ParseError(
                f"Couldn't load {source!r:.80} with these currently configured "
                "loaders: " + ", ".join(x.__name__ for x in configured_loaders)
            )

        logger.debug("Loaded document with root <%s>.", loaded_tree.getroot().tag)
        self._tree = loaded_tree

    def __contains__(self, node: TagNode) -> bool:
        """ Tests whether a node is part of a document instance. """
        if self._tree is None:
            return False
        top = node._etree_obj
        for top in node._etree_obj.iterancestors():
            pass
        return top is self._tree.getroot()

    def __str__(self) -> str:
        return self.dump()

    def add_root(self, name: str) -> TagNode:
        """ Adds the root node to an empty document and returns it. """
        if self._tree is not None:
            raise StructureError("The document already has a root node.")
        root = etree.Element(name)
        self._tree = root.getroottree()
        return TagNode(root)

    def dump(self, format: bool = False) -> str:
        """ Returns the serialized document without an XML declaration.

            :param format: Indents nested nodes with two spaces.
        """
        tree = self.__serializable_tree()
        try:
            return etree.tostring(tree, encoding="unicode", pretty_print=format)
        except etree.LxmlError as e:
            raise SerializeError(str(e)) from e

    @property
    def root(self) -> Optional[TagNode]:
        """ The root node of a document instance, if there is one yet. """
        if self._tree is None:
            return None
        return TagNode(self._tree.getroot())

    def __serializable_tree(self) -> etree._ElementTree:
        if self._tree is None:
            raise SerializeError("A document without a root node can't be serialized.")
        return self._tree

    def write(self, destination: Destination, format: bool = False):
        """ Writes the document to a file or a stream.

            Files and binary streams receive UTF-8 encoded data with an XML
            declaration, text streams get the same as :meth:`Document.dump` returns.

            :param destination: A file's path or name, or a stream.
            :param format: Indents nested nodes with two spaces.
        """
        tree = self.__serializable_tree()

        if isinstance(destination, (str, Path)):
            with Path(destination).open("wb") as file:
                self.__write_bytes(tree, file, format)
        elif isinstance(destination, TextIOBase):
            destination.write(self.dump(format))
        else:
            self.__write_bytes(tree, destination, format)

        logger.debug("Wrote document to %r.", destination)

    @staticmethod
    def __write_bytes(tree: etree._ElementTree, buffer: IO, format: bool):
        try:
            tree.write(
                buffer, encoding="utf-8", pretty_print=format, xml_declaration=True
            )
        except etree.LxmlError as e:
            raise SerializeError(str(e)) from e


__all__ = (
    ConversionError.__name__,
    Document.__name__,
    MissingAttributeError.__name__,
    ParseError.__name__,
    ParserOptions.__name__,
    SerializeError.__name__,
    StructureError.__name__,
    TagNode.__name__,
    XMLError.__name__,
)
