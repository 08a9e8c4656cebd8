from typing import IO, Any, Callable, Optional, Union
from pathlib import Path

from lxml import etree


AttributeValue = Union[str, bool, int, float, Any]
Destination = Union[str, Path, IO]
Loader = Callable[[Any, etree.XMLParser], Optional[etree._ElementTree]]
