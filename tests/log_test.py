import logging

import mockapi3.log
from mockapi3.log import ComponentFormatter


def record(name, level, msg):
    return logging.LogRecord(name, level, __file__, 1, msg, None, None)


def test_formatter():
    f = ComponentFormatter(color=False)
    assert f.format(record("mockapi3.server", logging.INFO, "Request received")) == (
        "[HTTP SERVER] ℹ  info      Request received"
    )
    assert f.format(record("mockapi3.validator", logging.ERROR, "Violation")) == "[VALIDATOR] ✖  error     Violation"
    assert f.format(record("other", logging.WARNING, "x")) == "[other] ⚠  warning   x"


def test_formatter_color():
    f = ComponentFormatter(color=True)
    line = f.format(record("mockapi3.store", logging.WARNING, "x"))
    assert line == "[STORE] \033[33m⚠  warning\033[0m   x"
    assert "\033[" not in f.format(record("mockapi3.store", logging.INFO, "x"))


def test_init(reset_logging, monkeypatch):
    monkeypatch.delenv("MOCKAPI3_LOGGING_HANDLERS", raising=False)
    mockapi3.log.handlers = None
    mockapi3.log.init()
    assert mockapi3.log.handlers == []
    assert logging.getLogger("mockapi3").handlers == []

    # once configured, init does nothing
    mockapi3.log.init(force=True)
    assert logging.getLogger("mockapi3").handlers == []


def test_init_force(reset_logging, monkeypatch):
    monkeypatch.delenv("MOCKAPI3_LOGGING_HANDLERS", raising=False)
    mockapi3.log.handlers = None
    mockapi3.log.init(force=True, level="DEBUG")
    assert mockapi3.log.handlers == ["console"]

    logger = logging.getLogger("mockapi3")
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    (handler,) = logger.handlers
    assert isinstance(handler.formatter, ComponentFormatter)


def test_init_environment(reset_logging, monkeypatch, tmp_path):
    monkeypatch.setenv("MOCKAPI3_LOGGING_HANDLERS", ",console,")
    mockapi3.log.handlers = None
    mockapi3.log.init()
    assert mockapi3.log.handlers == ["console"]
