""" Loaders turn the different kinds of sources that a :class:`lxml_typed.Document`
    accepts into an lxml tree. Each one returns :obj:`None` for sources that it
    doesn't handle, the first result that is not :obj:`None` is used. """

import re
from pathlib import Path
from typing import Any, IO, List, Optional, cast

from lxml import etree

from lxml_typed.typing import Loader


# decoded text is always handed to lxml as UTF-8
DECLARED_ENCODING = re.compile(
    r"""^(\s*<\?xml\s[^>]*?)\s+encoding\s*=\s*(["'])[^"']*\2"""
)


def path_loader(data: Any, parser: etree.XMLParser) -> Optional[etree._ElementTree]:
    if isinstance(data, Path):
        return etree.parse(str(data.resolve()), parser=parser)
    return None


def buffer_loader(data: Any, parser: etree.XMLParser) -> Optional[etree._ElementTree]:
    if callable(getattr(data, "read", None)):
        return etree.parse(cast(IO, data), parser=parser)
    return None


def text_loader(data: Any, parser: etree.XMLParser) -> Optional[etree._ElementTree]:
    if isinstance(data, str) and data.lstrip().startswith("<"):
        data = DECLARED_ENCODING.sub(r"\1", data, count=1).encode()
    if isinstance(data, bytes):
        return etree.fromstring(data, parser).getroottree()
    return None


def file_name_loader(
    data: Any, parser: etree.XMLParser
) -> Optional[etree._ElementTree]:
    if isinstance(data, str):
        return path_loader(Path(data), parser)
    return None


configured_loaders: List[Loader] = [
    path_loader,
    buffer_loader,
    text_loader,
    file_name_loader,
]


__all__ = ("configured_loaders",)
