"""
Structured log record formatting.

Turns one log record at a time into a self-describing text document,
including exception stack traces, diagnostic context maps and parameter
arrays.
"""

from .config import FormatterSettings, get_settings
from .formatters import (
    Generator,
    JsonFormatter,
    StructuredFormatter,
    XmlFormatter,
)
from .record import LogRecord, StackFrame, ThrownInfo
from .types import FormatterError, GeneratorState, GeneratorStateError, Keys, MarkupWriterError

__all__ = [
    # Formatters
    "StructuredFormatter",
    "XmlFormatter",
    "JsonFormatter",
    "Generator",
    # Records
    "LogRecord",
    "StackFrame",
    "ThrownInfo",
    "Keys",
    # Configuration
    "FormatterSettings",
    "get_settings",
    # Exceptions
    "FormatterError",
    "GeneratorStateError",
    "MarkupWriterError",
    "GeneratorState",
]
