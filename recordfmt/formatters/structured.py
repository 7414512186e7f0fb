"""
Orchestration of record fields onto a generator.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Union

import structlog

from ..config import FormatterSettings, get_settings
from ..record import LogRecord
from ..types import FormatterError, Keys
from .generator import Generator

logger = structlog.get_logger(__name__)


class StructuredFormatter(logging.Formatter):
    """
    Base formatter that writes each record through a format-specific generator.

    Subclasses provide ``create_generator()``; this class decides which
    fields are written and in which order. It is a ``logging.Formatter`` so
    any binding can be installed directly on a logging handler.
    """

    def __init__(
        self,
        print_details: Optional[bool] = None,
        date_format: Optional[str] = None,
        settings: Optional[FormatterSettings] = None,
    ):
        super().__init__()
        self.settings = settings or get_settings()
        self.print_details = self.settings.print_details if print_details is None else print_details
        self.date_format = date_format or self.settings.date_format

    def create_generator(self) -> Generator:
        """Return a new generator for a single record."""
        raise NotImplementedError

    def format(self, record: Union[LogRecord, logging.LogRecord]) -> str:
        """
        Format one record.

        Args:
            record: The record to format; standard library records are adapted

        Returns:
            The complete serialized record

        Raises:
            FormatterError: If the record could not be written
        """
        if isinstance(record, logging.LogRecord):
            record = LogRecord.from_logging(record)

        try:
            generator = self.create_generator()
            generator.begin()
            generator.add(Keys.TIMESTAMP, self.format_timestamp(record.millis))
            generator.add(Keys.SEQUENCE, record.sequence)
            generator.add(Keys.LOGGER_CLASS_NAME, record.logger_class_name)
            generator.add(Keys.LOGGER_NAME, record.logger_name)
            generator.add(Keys.LEVEL, record.level)
            generator.add(Keys.MESSAGE, record.formatted_message())
            if record.parameters is not None:
                generator.add_array(Keys.PARAMETERS, Keys.PARAMETER, record.parameters)
            generator.add(Keys.THREAD_NAME, record.thread_name)
            generator.add(Keys.THREAD_ID, record.thread_id)
            generator.add_map(Keys.MDC, record.mdc)
            generator.add(Keys.NDC, record.ndc)
            generator.add(Keys.HOST_NAME, record.host_name)
            generator.add(Keys.PROCESS_NAME, record.process_name)
            generator.add(Keys.PROCESS_ID, record.process_id)

            if record.thrown is not None:
                generator.add_stack_trace(record.thrown)

            if self.print_details:
                generator.add(Keys.SOURCE_CLASS_NAME, record.source_class_name)
                generator.add(Keys.SOURCE_FILE_NAME, record.source_file_name)
                generator.add(Keys.SOURCE_METHOD_NAME, record.source_method_name)
                generator.add(Keys.SOURCE_LINE_NUMBER,
                              record.source_line_number if record.source_line_number >= 0 else None)

            return generator.build()

        except FormatterError:
            raise
        except Exception as e:
            logger.debug("Error formatting record", sequence=record.sequence, error=str(e))
            raise FormatterError(f"Failed to format record {record.sequence}: {e}") from e

    def format_timestamp(self, millis: int) -> str:
        """Render epoch milliseconds as ISO-8601 UTC, or with ``date_format``."""
        timestamp = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        if self.date_format:
            return timestamp.strftime(self.date_format)
        return timestamp.isoformat(timespec="milliseconds")
