import pytest

from recordfmt.config import FormatterSettings
from recordfmt.formatters import JsonFormatter, XmlFormatter
from recordfmt.record import LogRecord, StackFrame, ThrownInfo


@pytest.fixture
def settings() -> FormatterSettings:
    """Settings independent of the environment."""
    return FormatterSettings(
        pretty_print=False,
        print_details=False,
        indent="    ",
        date_format=None,
    )


@pytest.fixture
def xml_formatter(settings) -> XmlFormatter:
    return XmlFormatter(settings=settings)


@pytest.fixture
def json_formatter(settings) -> JsonFormatter:
    return JsonFormatter(settings=settings)


@pytest.fixture
def boom() -> ThrownInfo:
    """Single-level exception with one known frame."""
    return ThrownInfo(
        type_name="RuntimeError",
        message="boom",
        frames=(StackFrame("C", "m", 42),),
    )


@pytest.fixture
def sample_record(boom) -> LogRecord:
    """A record with every field populated."""
    return LogRecord(
        level="ERROR",
        message="Processed %s of %d items",
        parameters=("batch-7", 3),
        logger_name="app.worker",
        logger_class_name="Logger",
        thread_name="worker-1",
        thread_id=17,
        millis=1700000000123,
        sequence=99,
        thrown=boom,
        mdc={"request": "r-1", "user": None},
        ndc="outer.inner",
        host_name="host-a",
        process_name="MainProcess",
        process_id=4242,
        source_class_name="worker",
        source_file_name="worker.py",
        source_method_name="run",
        source_line_number=128,
    )


@pytest.fixture
def minimal_record() -> LogRecord:
    """A record with only the required fields."""
    return LogRecord(level="INFO", message="hello", millis=0, sequence=1)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
