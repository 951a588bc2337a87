import logging

from tracing_perf import Level, LoggingSink, TimeReporterBuilder
from tracing_perf.utils.logging import setup_report_logger


def test_logging_sink_records_scope_and_level(caplog):
    caplog.set_level(logging.DEBUG, logger="tracing-perf")
    timer = TimeReporterBuilder("logged").level(Level.WARN).sink(LoggingSink()).build()
    timer.finish()

    records = [r for r in caplog.records if r.name == "tracing-perf"]
    assert len(records) == 1
    record = records[0]
    assert record.levelno == logging.WARNING
    assert record.span == "time-report"
    assert record.getMessage() == "name: logged"


def test_trace_level_is_named():
    assert logging.getLevelName(int(Level.TRACE)) == "TRACE"


def test_setup_report_logger_writes_file(tmp_path):
    log_path = tmp_path / "report.log"
    logger = setup_report_logger(log_path, level=Level.DEBUG)
    try:
        timer = TimeReporterBuilder("filed").level(Level.DEBUG).build()
        timer.finish()
        for handler in logger.handlers:
            handler.flush()
        text = log_path.read_text(encoding="utf-8")
        assert "DEBUG - time-report - name: filed" in text
    finally:
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
