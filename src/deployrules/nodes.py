"""Read-only navigation over a parsed rule set document.

The parser only depends on the small ``XmlNode`` interface defined here,
so it can run against any tree that provides it. ``ElementNode`` is the
adapter used in practice: it wraps an ElementTree element produced by
defusedxml.

Only element nodes are navigable. Text, comments and processing
instructions never show up as children or siblings.
"""

import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring as defused_fromstring

from deployrules.errors import DocumentLoadError

logger = logging.getLogger(__name__)


class XmlNode(ABC):
    """Navigation contract consumed by the rule set parser."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Element name of this node."""

    @abstractmethod
    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Attribute value, or ``default`` when the attribute is absent."""

    @abstractmethod
    def first_child(self) -> Optional["XmlNode"]:
        """First child element, or None if the node has no children."""

    @abstractmethod
    def next_sibling(self) -> Optional["XmlNode"]:
        """Following sibling element, or None at the end of the chain."""

    @abstractmethod
    def child_nodes(self, name: str) -> List["XmlNode"]:
        """Direct children called ``name``, in document order."""


def local_name(tag: str) -> str:
    """Strip a ``{namespace}`` prefix from an ElementTree tag."""
    return tag.split('}')[-1] if '}' in tag else tag


class ElementNode(XmlNode):
    """``XmlNode`` backed by an ElementTree element.

    Sibling lookups go through the parent wrapper, since ElementTree
    elements do not know their parent.
    """

    def __init__(
        self,
        element: ET.Element,
        parent: Optional["ElementNode"] = None,
        index: int = 0,
        strip_namespaces: bool = True,
    ):
        self.element = element
        self.parent = parent
        self.index = index
        self.strip_namespaces = strip_namespaces

    def __repr__(self) -> str:
        return f"ElementNode({self.name!r})"

    @property
    def name(self) -> str:
        tag = self.element.tag
        if not isinstance(tag, str):
            return ""
        return local_name(tag) if self.strip_namespaces else tag

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.element.get(name, default)

    def first_child(self) -> Optional["ElementNode"]:
        children = self._element_children()
        if not children:
            return None
        return self._wrap(children[0], 0)

    def next_sibling(self) -> Optional["ElementNode"]:
        if self.parent is None:
            return None
        siblings = self.parent._element_children()
        if self.index + 1 >= len(siblings):
            return None
        return self.parent._wrap(siblings[self.index + 1], self.index + 1)

    def child_nodes(self, name: str) -> List["ElementNode"]:
        return [
            node for node in (
                self._wrap(child, i) for i, child in enumerate(self._element_children())
            )
            if node.name == name
        ]

    def _element_children(self) -> List[ET.Element]:
        # Comments and PIs have callable tags when a parser keeps them
        return [child for child in self.element if isinstance(child.tag, str)]

    def _wrap(self, child: ET.Element, index: int) -> "ElementNode":
        return ElementNode(child, self, index, self.strip_namespaces)


def get_attribute(node: XmlNode, name: str, default: Optional[str] = None) -> Optional[str]:
    """Read an attribute from ``node`` with a default."""
    return node.get_attribute(name, default)


def get_child_nodes(node: XmlNode, name: str) -> List[XmlNode]:
    """Direct children of ``node`` named ``name``, in document order."""
    return node.child_nodes(name)


def load_document(content: str, strip_namespaces: bool = True) -> ElementNode:
    """Parse XML text into a navigable root node.

    Args:
        content: Raw XML document
        strip_namespaces: Expose namespaced tags by their local name

    Returns:
        Root ElementNode of the document

    Raises:
        DocumentLoadError: If the XML is malformed or rejected as unsafe
    """
    try:
        root = defused_fromstring(content, forbid_dtd=True)
    except ET.ParseError as e:
        raise DocumentLoadError(f"XML parse error: {e}") from e
    except DefusedXmlException as e:
        raise DocumentLoadError(f"Unsafe XML rejected: {e!r}") from e

    logger.debug("Loaded document with root <%s>", root.tag)
    return ElementNode(root, strip_namespaces=strip_namespaces)


def load_document_file(file_path: Path, strip_namespaces: bool = True) -> ElementNode:
    """Read and parse an XML file into a navigable root node.

    Raises:
        DocumentLoadError: If the file cannot be read or decoded, or the XML is invalid
    """
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentLoadError(f"Encoding error: {e}") from e
    except OSError as e:
        raise DocumentLoadError(f"Cannot read {file_path}: {e}") from e

    return load_document(content, strip_namespaces=strip_namespaces)
