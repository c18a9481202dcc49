import json
import logging

from consolekit.observability import (
    JsonFormatter,
    configure_logging,
    metrics_store,
    observe_timing,
    set_request_id,
)


def test_metrics_store_reset_clears_counters_and_timings():
    metrics_store.increment("console_warnings_total")
    metrics_store.observe("console_timer_seconds", 0.25)

    metrics_store.reset()

    snapshot = metrics_store.snapshot()
    assert snapshot.counters == {}
    assert snapshot.timings == {}


def test_metrics_snapshot_summarises_timings():
    metrics_store.observe("console_timer_seconds", 0.5)
    metrics_store.observe("console_timer_seconds", 1.5)

    stats = metrics_store.snapshot().timings["console_timer_seconds"]
    assert stats == {"count": 2.0, "total_s": 2.0, "avg_s": 1.0, "min_s": 0.5, "max_s": 1.5}


def test_observe_timing_records_one_sample():
    with observe_timing("block_seconds"):
        pass

    assert metrics_store.snapshot().timings["block_seconds"]["count"] == 1.0


def test_json_formatter_includes_console_fields():
    set_request_id("req-1")
    record = logging.LogRecord(
        name="consolekit.console",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="No such label 'x' for console.time_end()",
        args=(),
        exc_info=None,
    )
    record.operation = "console_warning"
    record.label = "x"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "consolekit.console"
    assert payload["message"] == "No such label 'x' for console.time_end()"
    assert payload["request_id"] == "req-1"
    assert payload["label"] == "x"
    assert payload["operation"] == "console_warning"
    assert payload["stream"] is None


def test_configure_logging_installs_json_handler():
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    try:
        configure_logging()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.INFO
    finally:
        root.handlers = original_handlers
        root.setLevel(original_level)
