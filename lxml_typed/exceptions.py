class XMLError(Exception):
    """
    Base class of all exceptions that are raised by this package.
    """

    pass


class ParseError(XMLError):
    """
    Raised when a source can't be read or doesn't contain well-formed, and if
    requested valid, XML.
    """

    pass


class StructureError(XMLError):
    """
    Raised when an operation would violate the structure of a tree, e.g. adding a
    second root, mixing text content with child nodes or moving a node into its own
    subtree.
    """

    pass


class MissingAttributeError(XMLError, LookupError):
    """
    Raised when a requested attribute doesn't exist or is empty.
    """

    def __init__(self, name: str):
        super().__init__(f"Requested attribute `{name}` does not exist in this node.")
        self.name = name


class ConversionError(XMLError, ValueError):
    """
    Raised when an attribute's value can't be converted to the requested type.
    """

    pass


class SerializeError(XMLError):
    """
    Raised when a tree can't be serialized.
    """

    pass


__all__ = (
    ConversionError.__name__,
    MissingAttributeError.__name__,
    ParseError.__name__,
    SerializeError.__name__,
    StructureError.__name__,
    XMLError.__name__,
)
