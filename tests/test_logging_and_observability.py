import io
import logging
import sys

from memory_haiku.utils import logging_config
from memory_haiku.utils.logging_config import _resolve_level, configure_logging
from memory_haiku.utils.observability import create_counter, create_histogram, get_logger


def test_resolve_level_accepts_names_numbers_and_junk():
    assert _resolve_level(None) == logging.INFO
    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level(" Warning ") == logging.WARNING
    assert _resolve_level("10") == 10
    assert _resolve_level(logging.ERROR) == logging.ERROR
    assert _resolve_level("not-a-level") == logging.INFO


def test_configure_logging_reads_environment(monkeypatch):
    calls = []
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.setenv("MEMORY_HAIKU_LOG_LEVEL", "ERROR")

    level = configure_logging()

    assert level == logging.ERROR
    assert calls[-1]["level"] == logging.ERROR
    assert calls[-1]["stream"] is sys.stderr
    assert logging.getLogger("memory_haiku").level == logging.ERROR

    # already configured: only the package level moves, no new handlers
    configure_logging("DEBUG")
    assert len(calls) == 1
    assert logging.getLogger("memory_haiku").level == logging.DEBUG

    # explicit level wins over the environment
    assert configure_logging("DEBUG", force=True) == logging.DEBUG
    assert calls[-1]["force"] is True
    logging.getLogger("memory_haiku").setLevel(logging.NOTSET)


def test_verbose_levels_stay_on_project_loggers(monkeypatch):
    calls = []
    stream = io.StringIO()
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    monkeypatch.delenv("MEMORY_HAIKU_LOG_LEVEL", raising=False)

    assert configure_logging("DEBUG", stream=stream) == logging.DEBUG

    # root stays at WARNING for library loggers
    assert calls[-1]["level"] == logging.WARNING
    assert calls[-1]["stream"] is stream
    assert logging.getLogger("memory_haiku").level == logging.DEBUG
    logging.getLogger("memory_haiku").setLevel(logging.NOTSET)


def test_structured_logger_renders_bound_and_call_context(caplog):
    caplog.set_level(logging.INFO, logger="memory_haiku.tests")
    logger = get_logger("memory_haiku.tests").bind(component="unit")

    logger.info("Packed line", context={"target": 5})

    message = caplog.records[-1].getMessage()
    assert message.startswith("Packed line | ")
    assert '"component": "unit"' in message
    assert '"target": 5' in message


def test_metric_helpers_tolerate_duplicate_registration():
    first = create_counter("memory_haiku_test_events_total", "Test events.", label_names=("kind",))
    second = create_counter("memory_haiku_test_events_total", "Test events.", label_names=("kind",))
    histogram = create_histogram("memory_haiku_test_seconds", "Test latency.")
    again = create_histogram("memory_haiku_test_seconds", "Test latency.")

    first.labels(kind="a").inc()
    second.labels(kind="a").inc(2)
    with histogram.time():
        pass
    again.observe(0.5)
