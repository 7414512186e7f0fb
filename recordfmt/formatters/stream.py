"""
XML writers backed by lxml.

``XmlStreamWriter`` takes start/end/empty element and character calls,
builds the element tree with lxml and writes the serialized document to a
text sink once the root element is ended. ``IndentingXmlWriter`` does the
same but indents the tree before serializing it, without changing its
element structure or text.
"""

from typing import List, Optional, Protocol

from lxml import etree
import structlog

from ..types import MarkupWriterError
from .writer import StringSinkWriter

logger = structlog.get_logger(__name__)


class MarkupWriter(Protocol):
    """Interface shared by the XML writers."""

    @property
    def depth(self) -> int:
        ...

    def write_start_element(self, name: str) -> None:
        ...

    def write_empty_element(self, name: str) -> None:
        ...

    def write_end_element(self) -> None:
        ...

    def write_characters(self, text: str) -> None:
        ...

    def flush(self) -> None:
        ...

    def close(self) -> None:
        ...


class XmlStreamWriter:
    """
    Writes a single XML document fragment to a sink.

    Open elements are tracked on a stack so every end matches its start.
    Element names and text are checked by lxml as they are written; misuse
    raises ``MarkupWriterError`` instead of producing malformed output. No
    XML declaration is written.
    """

    def __init__(self, sink: StringSinkWriter):
        self._sink = sink
        self._root: Optional[etree._Element] = None
        self._open: List[etree._Element] = []
        self._closed = False

    @property
    def depth(self) -> int:
        return len(self._open)

    def write_start_element(self, name: str) -> None:
        element = self._create_element(name)
        # Started elements keep the start/end form even without content
        element.text = ""
        self._open.append(element)

    def write_empty_element(self, name: str) -> None:
        self._create_element(name)
        if not self._open:
            self._serialize()

    def write_end_element(self) -> None:
        self._check_open()
        if not self._open:
            raise MarkupWriterError("No open element to end")
        self._open.pop()
        if not self._open:
            self._serialize()

    def write_characters(self, text: str) -> None:
        self._check_open()
        if not self._open:
            raise MarkupWriterError("Character data is not allowed outside the root element")
        current = self._open[-1]
        try:
            if len(current):
                last = current[-1]
                last.tail = (last.tail or "") + text
            else:
                current.text = (current.text or "") + text
        except (ValueError, TypeError) as e:
            raise MarkupWriterError(f"Text not allowed in XML: {text!r}: {e}") from e

    def flush(self) -> None:
        self._sink.flush()

    def close(self) -> None:
        """Mark the writer closed. The sink itself stays readable."""
        if self._open:
            logger.debug("Closing XML writer with open elements",
                         open_elements=[element.tag for element in self._open])
        self._closed = True

    def _prepare(self, root: etree._Element) -> None:
        """Adjust the finished tree before it is serialized."""
        pass

    def _serialize(self) -> None:
        self._prepare(self._root)
        self._sink.write(etree.tostring(self._root, encoding="unicode"))

    def _check_open(self) -> None:
        if self._closed:
            raise MarkupWriterError("Writer is closed")

    def _create_element(self, name: str) -> etree._Element:
        self._check_open()
        if not self._open and self._root is not None:
            raise MarkupWriterError(f"Document already has a root element; cannot write {name!r}")
        try:
            if self._open:
                return etree.SubElement(self._open[-1], name)
            self._root = etree.Element(name)
            return self._root
        except (ValueError, TypeError) as e:
            raise MarkupWriterError(f"Invalid element name: {name!r}") from e


class IndentingXmlWriter(XmlStreamWriter):
    """
    XML writer that indents nested elements.

    Each nested element starts on its own line, indented by its depth.
    Elements holding only text stay on one line, so text content is never
    altered.
    """

    def __init__(self, sink: StringSinkWriter, indent: str = "    "):
        super().__init__(sink)
        self.indent = indent

    def _prepare(self, root: etree._Element) -> None:
        etree.indent(root, space=self.indent)
