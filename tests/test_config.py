import os

import pytest

from weathertodo.cli import main as cli_main
from weathertodo.config import load_config
from weathertodo.errors import ConfigError
from weathertodo.integrations.openweather import OPENWEATHER_API_BASE

CONFIG_ENV_VARS = [
    "OPENWEATHER_API_KEY",
    "OPENWEATHER_BASE_URL",
    "OPENWEATHER_UNITS",
    "WEATHER_TIMEOUT_SEC",
    "DATABASE_URL",
    "ERROR_LOG_PATH",
    "LOG_UPLOAD_DELAY_SEC",
    "LOG_LEVEL",
    "DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # A .env path that does not exist keeps a developer's real .env out of the tests.
    return str(tmp_path / "missing.env")


def test_missing_api_key_raises(clean_env):
    with pytest.raises(ConfigError, match="OPENWEATHER_API_KEY"):
        load_config(clean_env)


def test_defaults(clean_env, monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "secret")

    config = load_config(clean_env)

    assert config.openweather_api_key == "secret"
    assert config.openweather_base_url == OPENWEATHER_API_BASE
    assert config.openweather_units == "metric"
    assert config.weather_timeout_sec == 10.0
    assert config.database_url == "sqlite:///./todoapp.db"
    assert config.error_log_path == "error_log.txt"
    assert config.log_upload_delay_sec == 1.0
    assert config.log_level == "WARNING"
    assert config.debug is False


def test_overrides_from_environment(clean_env, monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "secret")
    monkeypatch.setenv("OPENWEATHER_UNITS", "imperial")
    monkeypatch.setenv("WEATHER_TIMEOUT_SEC", "2.5")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEBUG", "true")

    config = load_config(clean_env)

    assert config.openweather_units == "imperial"
    assert config.weather_timeout_sec == 2.5
    assert config.database_url == "sqlite:///:memory:"
    assert config.log_level == "DEBUG"
    assert config.debug is True


def test_values_from_dotenv_file(clean_env, monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("OPENWEATHER_API_KEY=from-file\nLOG_UPLOAD_DELAY_SEC=0\n", encoding="utf-8")

    config = load_config(str(env_file))

    assert config.openweather_api_key == "from-file"
    assert config.log_upload_delay_sec == 0.0
    # load_dotenv writes into os.environ.
    os.environ.pop("OPENWEATHER_API_KEY", None)
    os.environ.pop("LOG_UPLOAD_DELAY_SEC", None)


def test_malformed_number_raises(clean_env, monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "secret")
    monkeypatch.setenv("WEATHER_TIMEOUT_SEC", "soon")

    with pytest.raises(ConfigError, match="WEATHER_TIMEOUT_SEC"):
        load_config(clean_env)


def test_main_exits_before_menu_without_api_key(monkeypatch, capsys):
    def fail():
        raise ConfigError("OpenWeather API key is required. Set OPENWEATHER_API_KEY env var.")

    monkeypatch.setattr(cli_main, "load_config", fail)
    monkeypatch.setattr(cli_main, "run", lambda *args: pytest.fail("menu should not start"))

    assert cli_main.main() == 1
    assert "Configuration error" in capsys.readouterr().err
