"""
XML binding of the structured formatter.
"""

from typing import Any, Mapping, Optional, Sequence

import structlog

from ..config import FormatterSettings
from ..record import ThrownInfo
from ..types import GeneratorStateError, Keys
from .generator import Generator
from .stream import IndentingXmlWriter, MarkupWriter, XmlStreamWriter
from .structured import StructuredFormatter
from .writer import StringSinkWriter

logger = structlog.get_logger(__name__)


class XmlFormatter(StructuredFormatter):
    """
    Formats each record as an XML document rooted at ``<record>``.

    The details (source class, file, method and line) are written only
    when ``print_details`` is on.
    """

    def __init__(
        self,
        print_details: Optional[bool] = None,
        pretty_print: Optional[bool] = None,
        date_format: Optional[str] = None,
        settings: Optional[FormatterSettings] = None,
    ):
        super().__init__(print_details=print_details, date_format=date_format, settings=settings)
        self._pretty_print = self.settings.pretty_print if pretty_print is None else pretty_print
        self.indent = self.settings.indent
        self.logger = logger.bind(component="XmlFormatter")

    @property
    def pretty_print(self) -> bool:
        """Whether generators created from now on indent their output."""
        return self._pretty_print

    @pretty_print.setter
    def pretty_print(self, value: bool) -> None:
        self._pretty_print = bool(value)
        self.logger.debug("Pretty printing changed", pretty_print=self._pretty_print)

    def create_generator(self) -> "XmlGenerator":
        return XmlGenerator(pretty_print=self._pretty_print, indent=self.indent)


class XmlGenerator(Generator):
    """Generator writing one record through an lxml-backed XML writer."""

    def __init__(self, pretty_print: bool = False, indent: str = "    "):
        super().__init__()
        # Fixed for the lifetime of this generator
        self.pretty_print = pretty_print
        self.sink = StringSinkWriter()
        if pretty_print:
            self.xml_writer: MarkupWriter = IndentingXmlWriter(self.sink, indent=indent)
        else:
            self.xml_writer = XmlStreamWriter(self.sink)

    def _begin(self) -> None:
        self._write_start(Keys.RECORD)

    def _add(self, key: str, value: Any) -> None:
        if value is None:
            self._write_empty(key)
        else:
            self._write_start(key)
            self.xml_writer.write_characters(str(value))
            self._write_end()

    def _add_array(self, key: str, element_key: str, values: Optional[Sequence[Any]]) -> None:
        if values is None:
            self._write_empty(key)
            return
        self._write_start(key)
        for value in values:
            self._add(element_key, value)
        self._write_end()

    def _add_map(self, key: str, values: Optional[Mapping[str, Any]]) -> None:
        if values is None:
            self._write_empty(key)
            return
        self._write_start(key)
        for entry_key, value in values.items():
            self._add(str(entry_key), value)
        self._write_end()

    def _add_stack_trace(self, thrown: ThrownInfo) -> None:
        self._write_start(Keys.EXCEPTION)
        self._add(Keys.EXCEPTION_MESSAGE, thrown.message)

        for frame in thrown.frames:
            self._write_start(Keys.EXCEPTION_FRAME)
            self._add(Keys.EXCEPTION_FRAME_CLASS, frame.class_name)
            self._add(Keys.EXCEPTION_FRAME_METHOD, frame.method_name)
            if frame.line_number >= 0:
                self._add(Keys.EXCEPTION_FRAME_LINE, frame.line_number)
            self._write_end()  # frame

        if thrown.cause is not None:
            self._write_start(Keys.EXCEPTION_CAUSED_BY)
            self._add_stack_trace(thrown.cause)
            self._write_end()  # causedBy

        self._write_end()  # exception

    def _build(self) -> str:
        depth = self.xml_writer.depth
        if depth != 1:
            raise GeneratorStateError(f"Cannot build record with {depth} open elements; expected 1")
        self._write_end()  # record
        self._best_effort(self.xml_writer.flush, "flush")
        self._best_effort(self.xml_writer.close, "close")
        return self.sink.getvalue()

    def _write_start(self, name: str) -> None:
        self.xml_writer.write_start_element(name)

    def _write_empty(self, name: str) -> None:
        self.xml_writer.write_empty_element(name)

    def _write_end(self) -> None:
        self.xml_writer.write_end_element()
