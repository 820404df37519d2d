import logging
from logging.handlers import RotatingFileHandler

from denycord.util.logger import (
    ColorFormatter,
    PromptToolkitHandler,
    get_log_filepath,
    get_logger,
    handle_exception,
    setup_logger,
    should_use_color,
)


class DummyStream:
    def __init__(self, tty):
        self._tty = tty

    def isatty(self):
        return self._tty


def test_get_logger_has_console_and_file_handlers():
    logger = get_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert any(isinstance(h, PromptToolkitHandler) for h in logger.handlers)
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)


def test_setup_logger_idempotent():
    logger1 = setup_logger("test_logger_idem")
    logger2 = setup_logger("test_logger_idem")
    assert logger1 is logger2
    assert len(logger1.handlers) == 2


def test_color_formatter_applies_color():
    formatter = ColorFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("test", logging.ERROR, "", 0, "error occurred", None, None)
    formatted = formatter.format(record)
    assert "\033[31m" in formatted and "error occurred" in formatted


def test_should_use_color_follows_tty(monkeypatch):
    monkeypatch.setattr("sys.stderr", DummyStream(True))
    assert should_use_color() is True
    monkeypatch.setattr("sys.stderr", DummyStream(False))
    assert should_use_color() is False


def test_get_log_filepath_is_stable():
    assert get_log_filepath() == get_log_filepath()
    assert get_log_filepath().parent.exists()


def test_noisy_loggers_are_silenced():
    assert logging.getLogger("watchdog").level == logging.ERROR
    assert logging.getLogger("discord").level == logging.ERROR


def test_handle_exception_logs_error(caplog):
    class DummyException(Exception):
        pass
    with caplog.at_level(logging.ERROR):
        try:
            raise DummyException("fail")
        except DummyException as exc:
            handle_exception(DummyException, exc, exc.__traceback__)
    assert any("Uncaught exception" in r.message for r in caplog.records)
