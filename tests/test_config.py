import logging

from tidyeval import config


def test_log_level_from_environment(monkeypatch):
    monkeypatch.setenv("TIDYEVAL_LOG_LEVEL", "debug")
    assert config.get_log_level() == logging.DEBUG
    monkeypatch.setenv("TIDYEVAL_LOG_LEVEL", "not-a-level")
    assert config.get_log_level() is None
    monkeypatch.delenv("TIDYEVAL_LOG_LEVEL")
    assert config.get_log_level() is None


def test_configure_logging_sets_package_logger_level(monkeypatch):
    logger = logging.getLogger("tidyeval")
    previous = logger.level
    monkeypatch.setenv("TIDYEVAL_LOG_LEVEL", "WARNING")
    try:
        config.configure_logging()
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(previous)


def test_strict_cleanup_flag(monkeypatch):
    monkeypatch.delenv("TIDYEVAL_STRICT_CLEANUP", raising=False)
    assert not config.strict_cleanup()
    monkeypatch.setenv("TIDYEVAL_STRICT_CLEANUP", "yes")
    assert config.strict_cleanup()
