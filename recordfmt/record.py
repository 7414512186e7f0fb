"""
Log record model consumed by the structured formatters.

The formatters only read these objects. ``LogRecord.from_logging`` adapts a
standard library ``logging.LogRecord`` so the formatters can be installed on
ordinary logging handlers.
"""

import itertools
import logging
import os
import socket
import time
import traceback
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Mapping, Optional, Tuple

_sequence = itertools.count()


def next_sequence() -> int:
    """Return the next process-wide record sequence number."""
    return next(_sequence)


@dataclass(frozen=True)
class StackFrame:
    """One frame of a thrown exception's stack trace."""

    class_name: str
    method_name: str
    line_number: int = -1


@dataclass(frozen=True)
class ThrownInfo:
    """
    Snapshot of a thrown exception.

    Frames are ordered outermost call first, matching ``traceback`` ordering.
    """

    type_name: str
    message: Optional[str] = None
    frames: Tuple[StackFrame, ...] = ()
    cause: Optional["ThrownInfo"] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ThrownInfo":
        """
        Build a snapshot of ``exc`` and its chain of causes.

        Args:
            exc: The exception to capture

        Returns:
            ThrownInfo for ``exc``; ``cause`` follows ``__cause__`` or the
            implicit ``__context__`` unless it was suppressed
        """
        chain = []
        seen = set()
        current = exc
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            chain.append(current)
            if current.__cause__ is not None:
                current = current.__cause__
            elif not current.__suppress_context__:
                current = current.__context__
            else:
                current = None

        info = None
        for item in reversed(chain):
            info = cls(
                type_name=type(item).__qualname__,
                message=str(item) if item.args else None,
                frames=_extract_frames(item.__traceback__),
                cause=info,
            )
        return info


def _extract_frames(tb) -> Tuple[StackFrame, ...]:
    frames = []
    for frame, lineno in traceback.walk_tb(tb):
        frames.append(StackFrame(
            class_name=frame.f_globals.get("__name__", "<unknown>"),
            method_name=frame.f_code.co_name,
            line_number=lineno if lineno is not None else -1,
        ))
    return tuple(frames)


@dataclass(frozen=True)
class LogRecord:
    """A single log event with individually optional fields."""

    level: str
    message: Optional[str]
    parameters: Optional[Tuple[Any, ...]] = None
    logger_name: Optional[str] = None
    logger_class_name: Optional[str] = None
    thread_name: Optional[str] = None
    thread_id: Optional[int] = None
    millis: int = field(default_factory=lambda: int(time.time() * 1000))
    sequence: int = field(default_factory=next_sequence)
    thrown: Optional[ThrownInfo] = None
    mdc: Optional[Mapping[str, Any]] = None
    ndc: Optional[str] = None
    host_name: Optional[str] = None
    process_name: Optional[str] = None
    process_id: Optional[int] = None
    source_class_name: Optional[str] = None
    source_file_name: Optional[str] = None
    source_method_name: Optional[str] = None
    source_line_number: int = -1

    def formatted_message(self) -> Optional[str]:
        """Apply %-style parameters to the message template."""
        if self.message is None or not self.parameters:
            return self.message
        try:
            return self.message % self.parameters
        except (TypeError, ValueError, KeyError):
            # Template does not take these parameters; report it verbatim
            return self.message

    @classmethod
    def from_logging(cls, record: logging.LogRecord) -> "LogRecord":
        """Adapt a standard library log record."""
        thrown = None
        if isinstance(record.exc_info, tuple) and record.exc_info[1] is not None:
            thrown = ThrownInfo.from_exception(record.exc_info[1])

        # Mapping args are rendered by logging itself
        parameters = record.args if isinstance(record.args, tuple) and record.args else None
        sequence = getattr(record, "sequence", None)

        return cls(
            level=record.levelname,
            message=record.getMessage() if parameters is None else str(record.msg),
            parameters=parameters,
            logger_name=record.name,
            logger_class_name=logging.getLoggerClass().__qualname__,
            thread_name=record.threadName,
            thread_id=record.thread,
            millis=int(record.created * 1000),
            sequence=sequence if sequence is not None else next_sequence(),
            thrown=thrown,
            mdc=getattr(record, "mdc", None),
            ndc=getattr(record, "ndc", None),
            host_name=_host_name(),
            process_name=record.processName,
            process_id=record.process,
            source_class_name=record.module,
            source_file_name=os.path.basename(record.pathname) if record.pathname else None,
            source_method_name=record.funcName,
            source_line_number=record.lineno if record.lineno is not None else -1,
        )


@lru_cache(maxsize=1)
def _host_name() -> str:
    return socket.gethostname()
