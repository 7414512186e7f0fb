"""
JSON binding of the structured formatter.
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

import structlog

from ..config import FormatterSettings
from ..record import ThrownInfo
from ..types import Keys
from .generator import Generator
from .structured import StructuredFormatter

logger = structlog.get_logger(__name__)


class JsonFormatter(StructuredFormatter):
    """Formats each record as a single JSON object."""

    def __init__(
        self,
        print_details: Optional[bool] = None,
        pretty_print: Optional[bool] = None,
        date_format: Optional[str] = None,
        settings: Optional[FormatterSettings] = None,
    ):
        super().__init__(print_details=print_details, date_format=date_format, settings=settings)
        self.pretty_print = self.settings.pretty_print if pretty_print is None else pretty_print

    def create_generator(self) -> "JsonGenerator":
        return JsonGenerator(pretty_print=self.pretty_print)


class JsonGenerator(Generator):
    """Generator collecting one record into an ordered JSON object."""

    def __init__(self, pretty_print: bool = False):
        super().__init__()
        self.pretty_print = pretty_print
        self._record: Dict[str, Any] = {}

    def _begin(self) -> None:
        self._record.clear()

    def _add(self, key: str, value: Any) -> None:
        self._record[key] = _json_value(value)

    def _add_array(self, key: str, element_key: str, values: Optional[Sequence[Any]]) -> None:
        # JSON arrays carry no per-element name
        self._record[key] = None if values is None else [_json_value(v) for v in values]

    def _add_map(self, key: str, values: Optional[Mapping[str, Any]]) -> None:
        if values is None:
            self._record[key] = None
        else:
            self._record[key] = {str(k): _json_value(v) for k, v in values.items()}

    def _add_stack_trace(self, thrown: ThrownInfo) -> None:
        self._record[Keys.EXCEPTION] = _exception_object(thrown)

    def _build(self) -> str:
        if self.pretty_print:
            return json.dumps(self._record, indent=2, ensure_ascii=False)
        return json.dumps(self._record, separators=(",", ":"), ensure_ascii=False)


def _json_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


def _exception_object(thrown: ThrownInfo) -> Dict[str, Any]:
    frames: List[Dict[str, Any]] = []
    for frame in thrown.frames:
        entry: Dict[str, Any] = {
            Keys.EXCEPTION_FRAME_CLASS: frame.class_name,
            Keys.EXCEPTION_FRAME_METHOD: frame.method_name,
        }
        if frame.line_number >= 0:
            entry[Keys.EXCEPTION_FRAME_LINE] = frame.line_number
        frames.append(entry)

    result: Dict[str, Any] = {
        Keys.EXCEPTION_MESSAGE: thrown.message,
        Keys.EXCEPTION_FRAMES: frames,
    }
    if thrown.cause is not None:
        result[Keys.EXCEPTION_CAUSED_BY] = _exception_object(thrown.cause)
    return result
