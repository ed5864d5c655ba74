"""Tests de configuration / Configuration tests."""

import logging

import pytest

from vehicle_log.config import LogFormat, LogLevel, Settings

CONFIG_YAML = """
server:
  host: 0.0.0.0
  port: 8080
database:
  url: postgresql+asyncpg://vl:secret@db/vehicle_log
  pool_size: 20
log:
  level: debug
  format: json
"""


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Retirer les variables VL__ de la session / Drop the session-wide VL__ variables."""
    monkeypatch.delenv("VL__DATABASE__URL", raising=False)
    monkeypatch.delenv("VL__RATE_LIMIT__ENABLED", raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults(clean_env, tmp_path):
    clean_env.setenv("CONFIG_FILE", str(tmp_path / "absent.yml"))
    s = Settings()
    assert s.server.host == "127.0.0.1"
    assert s.server.port == 3000
    assert s.database.url == "sqlite+aiosqlite:///./vehicle_log.db"
    assert s.log.level == LogLevel.INFO
    assert s.log.format == LogFormat.FULL
    assert s.rate_limit.enabled is True


def test_yaml_file(clean_env, tmp_path):
    config_file = tmp_path / "vehicle_log.yml"
    config_file.write_text(CONFIG_YAML)
    clean_env.setenv("CONFIG_FILE", str(config_file))

    s = Settings()
    assert s.server.host == "0.0.0.0"
    assert s.server.port == 8080
    assert s.database.url.startswith("postgresql+asyncpg://")
    assert s.database.pool_size == 20
    assert s.database.max_overflow == 10
    assert s.log.level == LogLevel.DEBUG
    assert s.log.format == LogFormat.JSON


def test_env_overrides_yaml(clean_env, tmp_path):
    config_file = tmp_path / "vehicle_log.yml"
    config_file.write_text(CONFIG_YAML)
    clean_env.setenv("CONFIG_FILE", str(config_file))
    clean_env.setenv("VL__SERVER__PORT", "9090")
    clean_env.setenv("VL__LOG__LEVEL", "warn")

    s = Settings()
    assert s.server.port == 9090
    assert s.server.host == "0.0.0.0"
    assert s.log.level == LogLevel.WARN
    assert s.log.format == LogFormat.JSON


def test_invalid_port(clean_env, tmp_path):
    clean_env.setenv("CONFIG_FILE", str(tmp_path / "absent.yml"))
    clean_env.setenv("VL__SERVER__PORT", "70000")
    with pytest.raises(ValueError):
        Settings()


def test_log_level_mapping():
    assert LogLevel.TRACE.to_logging() == logging.DEBUG
    assert LogLevel.WARN.to_logging() == logging.WARNING
    assert LogLevel.ERROR.to_logging() == logging.ERROR
