import logging
import os

import pytest

from watch_notify import ObserverError, ObserverFailure, Registry, RegistrySettings, WatchNotifyError, setup_logger


def test_defaults():
    settings = RegistrySettings()
    assert settings.to_dict() == {
        "logger_name": "watch_notify",
        "log_level": "WARNING",
        "log_tracebacks": True,
    }


def test_from_env_reads_environment(monkeypatch):
    monkeypatch.setenv("WATCH_NOTIFY_LOGGER_NAME", "bus")
    monkeypatch.setenv("WATCH_NOTIFY_LOG_LEVEL", "debug")
    monkeypatch.setenv("WATCH_NOTIFY_LOG_TRACEBACKS", "no")

    settings = RegistrySettings.from_env(env_file=None)
    assert settings.logger_name == "bus"
    assert settings.log_level == "DEBUG"
    assert settings.log_tracebacks is False


def test_from_env_loads_dotenv_file(monkeypatch, tmp_path):
    for key in ("LOGGER_NAME", "LOG_LEVEL", "LOG_TRACEBACKS"):
        monkeypatch.delenv(f"PUBSUB_{key}", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("PUBSUB_LOG_LEVEL=error\nPUBSUB_LOG_TRACEBACKS=1\n")

    try:
        settings = RegistrySettings.from_env(prefix="PUBSUB_", env_file=str(env_file))
    finally:
        # load_dotenv writes into os.environ
        os.environ.pop("PUBSUB_LOG_LEVEL", None)
        os.environ.pop("PUBSUB_LOG_TRACEBACKS", None)

    assert settings.log_level == "ERROR"
    assert settings.log_tracebacks is True
    assert settings.logger_name == "watch_notify"


def test_registry_uses_configured_logger(caplog):
    registry = Registry(settings=RegistrySettings(logger_name="custom.bus", log_tracebacks=False))
    registry.register("t", lambda: 1 / 0)

    with caplog.at_level(logging.ERROR, logger="custom.bus"):
        registry.publish("t")

    record = next(r for r in caplog.records if r.name == "custom.bus")
    assert "publishing on 't' threw an error" in record.getMessage()
    assert record.exc_info is None


def test_setup_logger_writes_to_stderr(capsys):
    logger = setup_logger("watch_notify.test_stderr", "INFO")
    logger.info("hello")
    captured = capsys.readouterr()
    assert "hello" in captured.err
    assert "watch_notify.test_stderr" in captured.err
    assert captured.out == ""


def test_setup_logger_does_not_duplicate_handlers():
    first = setup_logger("watch_notify.test_dupes")
    second = setup_logger("watch_notify.test_dupes", "DEBUG")
    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.DEBUG


def test_failure_to_error():
    cause = ValueError("bad value")
    failure = ObserverFailure(
        topic="t",
        handle=("t", 0),
        observer="observer",
        error=str(cause),
        error_type="ValueError",
        exception=cause,
    )
    err = failure.to_error()
    assert isinstance(err, WatchNotifyError)
    assert err.handle == ("t", 0)
    assert err.__cause__ is cause
    assert str(err) == "publishing on 't' threw an error: bad value"
    assert "exception" not in failure.model_dump()

    with pytest.raises(ObserverError):
        raise err
