"""Tests for settings and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from sorotask.config import ContractSettings, KeeperSettings
from sorotask.keeper import RetryPolicy
from sorotask.logging_setup import setup_logging, setup_logging_from_settings


def test_contract_defaults(monkeypatch):
    monkeypatch.delenv("SOROTASK_STORAGE_BACKEND", raising=False)
    settings = ContractSettings()
    assert settings.storage_backend == "memory"
    assert settings.log_level == "INFO"


def test_contract_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SOROTASK_STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("SOROTASK_DB_PATH", str(tmp_path / "x.db"))

    settings = ContractSettings()

    assert settings.storage_backend == "sqlite"
    assert settings.db_path == str(tmp_path / "x.db")


def test_unknown_backend_rejected():
    with pytest.raises(ValidationError):
        ContractSettings(storage_backend="redis")


def test_keeper_settings_from_env(monkeypatch):
    monkeypatch.setenv("KEEPER_POLLING_INTERVAL", "2.5")
    monkeypatch.setenv("KEEPER_MAX_RETRIES", "7")

    settings = KeeperSettings()

    assert settings.polling_interval == 2.5
    assert settings.max_retries == 7
    assert RetryPolicy.from_settings(settings).max_retries == 7


@pytest.mark.parametrize(
    "overrides",
    [{"polling_interval": 0}, {"max_concurrent_executions": 0}, {"max_retries": -1}],
)
def test_keeper_settings_validation(overrides):
    with pytest.raises(ValidationError):
        KeeperSettings(**overrides)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    log_file = setup_logging(log_dir=tmp_path / "logs")

    logging.getLogger("sorotask.test").debug("hello from test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file == tmp_path / "logs" / "sorotask.log"
    assert "hello from test" in log_file.read_text(encoding="utf-8")


def test_console_filter_hides_third_party_info(restore_root_logger, tmp_path):
    setup_logging(log_dir=tmp_path)
    console = logging.getLogger().handlers[0]

    def record(name, level):
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    assert console.filter(record("sorotask.keeper", logging.INFO))
    assert not console.filter(record("asyncio", logging.INFO))
    assert console.filter(record("asyncio", logging.WARNING))
    assert not console.filter(record("py.warnings", logging.WARNING))


def test_logging_follows_contract_settings(monkeypatch, tmp_path, restore_root_logger):
    monkeypatch.setenv("SOROTASK_LOG_DIR", str(tmp_path / "from-env"))
    monkeypatch.setenv("SOROTASK_LOG_LEVEL", "warning")

    log_file = setup_logging_from_settings(ContractSettings())
    logging.getLogger("sorotask.test").debug("settings driven")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert log_file == tmp_path / "from-env" / "sorotask.log"
    assert "settings driven" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger().handlers[0].level == logging.WARNING
