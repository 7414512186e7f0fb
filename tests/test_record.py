"""
Tests for the log record model and its adapters.
"""

import logging
import sys

from recordfmt.record import LogRecord, StackFrame, ThrownInfo, next_sequence


def raise_chain():
    try:
        raise KeyError("inner")
    except KeyError as e:
        raise RuntimeError("outer") from e


class TestThrownInfo:
    """Test conversion of live exceptions."""

    def test_message_and_frames(self):
        try:
            raise ValueError("bad")
        except ValueError as e:
            info = ThrownInfo.from_exception(e)

        assert info.type_name == "ValueError"
        assert info.message == "bad"
        assert info.frames[-1].class_name == __name__
        assert info.frames[-1].method_name == "test_message_and_frames"
        assert info.frames[-1].line_number > 0
        assert info.cause is None

    def test_no_message(self):
        try:
            raise ValueError()
        except ValueError as e:
            info = ThrownInfo.from_exception(e)
        assert info.message is None

    def test_explicit_cause(self):
        try:
            raise_chain()
        except RuntimeError as e:
            info = ThrownInfo.from_exception(e)

        assert info.message == "outer"
        assert info.cause.type_name == "KeyError"
        assert info.cause.message == "'inner'"
        assert info.cause.frames[-1].method_name == "raise_chain"

    def test_implicit_context(self):
        try:
            try:
                raise KeyError("first")
            except KeyError:
                raise ValueError("second")
        except ValueError as e:
            info = ThrownInfo.from_exception(e)
        assert info.cause.type_name == "KeyError"

    def test_suppressed_context(self):
        try:
            try:
                raise KeyError("first")
            except KeyError:
                raise ValueError("second") from None
        except ValueError as e:
            info = ThrownInfo.from_exception(e)
        assert info.cause is None

    def test_cycle_terminates(self):
        first = ValueError("first")
        second = ValueError("second")
        first.__cause__ = second
        second.__cause__ = first
        info = ThrownInfo.from_exception(first)
        assert info.cause.message == "second"
        assert info.cause.cause is None

    def test_unraised_exception_has_no_frames(self):
        info = ThrownInfo.from_exception(ValueError("never raised"))
        assert info.frames == ()


class TestLogRecord:
    """Test record defaults and message formatting."""

    def test_formatted_message(self):
        record = LogRecord(level="INFO", message="%s=%d", parameters=("x", 1))
        assert record.formatted_message() == "x=1"

    def test_mismatched_parameters_keep_template(self):
        record = LogRecord(level="INFO", message="no placeholders", parameters=("x",))
        assert record.formatted_message() == "no placeholders"

    def test_null_message(self):
        assert LogRecord(level="INFO", message=None).formatted_message() is None

    def test_sequence_increases(self):
        first = LogRecord(level="INFO", message="a")
        second = LogRecord(level="INFO", message="b")
        assert second.sequence > first.sequence
        assert next_sequence() > second.sequence

    def test_from_logging(self):
        try:
            raise OSError("disk")
        except OSError:
            exc_info = sys.exc_info()

        source = logging.LogRecord(
            name="svc",
            level=logging.ERROR,
            pathname="/opt/svc/main.py",
            lineno=12,
            msg="failed %s",
            args=("write",),
            exc_info=exc_info,
            func="handle",
        )
        source.ndc = "req"

        record = LogRecord.from_logging(source)
        assert record.level == "ERROR"
        assert record.message == "failed %s"
        assert record.parameters == ("write",)
        assert record.formatted_message() == "failed write"
        assert record.logger_name == "svc"
        assert record.source_file_name == "main.py"
        assert record.source_class_name == "main"
        assert record.source_method_name == "handle"
        assert record.source_line_number == 12
        assert record.millis == int(source.created * 1000)
        assert record.ndc == "req"
        assert record.mdc is None
        assert record.thrown.message == "disk"
        assert record.host_name

    def test_from_logging_without_args(self):
        source = logging.LogRecord("svc", logging.INFO, __file__, 1, "plain", None, None)
        record = LogRecord.from_logging(source)
        assert record.parameters is None
        assert record.message == "plain"

    def test_stack_frame_default_line_unknown(self):
        assert StackFrame("C", "m").line_number == -1
