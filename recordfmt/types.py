"""
Type definitions shared by the record formatters.
"""

from enum import Enum
from typing import Optional


class FormatterError(Exception):
    """Base exception for record formatting errors."""
    pass


class GeneratorStateError(FormatterError):
    """A generator operation was called out of order or with unbalanced nesting."""

    def __init__(self, message: str, state: Optional["GeneratorState"] = None):
        self.state = state
        super().__init__(message)


class MarkupWriterError(FormatterError):
    """The underlying markup writer rejected a write."""
    pass


class GeneratorState(Enum):
    """Lifecycle of a single generator instance."""
    CREATED = "created"
    BEGUN = "begun"
    BUILT = "built"


class Keys:
    """
    Element names used by the structured formatters.

    The exception keys are reserved by the generators themselves; the
    remaining keys are the record fields emitted by ``StructuredFormatter``.
    """

    RECORD = "record"

    # Exception structure
    EXCEPTION = "exception"
    EXCEPTION_CAUSED_BY = "causedBy"
    EXCEPTION_FRAME = "frame"
    EXCEPTION_FRAMES = "frames"
    EXCEPTION_FRAME_CLASS = "class"
    EXCEPTION_FRAME_LINE = "line"
    EXCEPTION_FRAME_METHOD = "method"
    EXCEPTION_MESSAGE = "message"

    # Record fields
    TIMESTAMP = "timestamp"
    SEQUENCE = "sequence"
    LOGGER_CLASS_NAME = "loggerClassName"
    LOGGER_NAME = "loggerName"
    LEVEL = "level"
    MESSAGE = "message"
    PARAMETERS = "parameters"
    PARAMETER = "parameter"
    THREAD_NAME = "threadName"
    THREAD_ID = "threadId"
    MDC = "mdc"
    NDC = "ndc"
    HOST_NAME = "hostName"
    PROCESS_NAME = "processName"
    PROCESS_ID = "processId"

    # Source details
    SOURCE_CLASS_NAME = "sourceClassName"
    SOURCE_FILE_NAME = "sourceFileName"
    SOURCE_METHOD_NAME = "sourceMethodName"
    SOURCE_LINE_NUMBER = "sourceLineNumber"
