from typing import NamedTuple

from lxml import etree


class ParserOptions(NamedTuple):
    """
    The configuration options that define the behaviour of the lxml parser that
    loads documents.

    DTD validation isn't configured here, it's requested per document with the
    ``validate`` argument of :class:`lxml_typed.Document`, which also implies the
    loading of a referenced DTD.
    """

    remove_blank_text: bool = True
    """
    Discards whitespace-only text between tags so that indented input isn't
    mistaken for text content.  Default: :obj:`True`.
    """
    remove_comments: bool = False
    """Ignore comments.  Default: :obj:`False`."""
    remove_processing_instructions: bool = False
    """Ignore processing instructions.  Default: :obj:`False`."""
    resolve_entities: bool = False
    """Replace entity references with their contents.  Default: :obj:`False`."""
    load_referenced_resources: bool = False
    """
    Allows the loading of referenced external DTDs, also from the network.
    Default: :obj:`False`.
    """
    huge_tree: bool = False
    """Lifts libxml2's limits on tree depth and text sizes.  Default: :obj:`False`."""


DEFAULT_PARSER_OPTIONS = ParserOptions()


def create_parser(
    options: ParserOptions = DEFAULT_PARSER_OPTIONS, validate: bool = False
) -> etree.XMLParser:
    return etree.XMLParser(
        dtd_validation=validate,
        huge_tree=options.huge_tree,
        load_dtd=validate or options.load_referenced_resources,
        no_network=not options.load_referenced_resources,
        remove_blank_text=options.remove_blank_text,
        remove_comments=options.remove_comments,
        remove_pis=options.remove_processing_instructions,
        resolve_entities=options.resolve_entities,
    )


__all__ = (
    ParserOptions.__name__,
    create_parser.__name__,
    "DEFAULT_PARSER_OPTIONS",
)
