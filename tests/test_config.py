import pytest

from core.config import Settings, get_env, load_settings

ENV_VARS = (
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "PORT",
    "LOG_LEVEL",
    "DB_CONNECT_ATTEMPTS",
    "DB_CONNECT_DELAY_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_unset():
    s = load_settings()

    assert s.db_host == "localhost"
    assert s.db_port == "3306"
    assert s.db_user == "root"
    assert s.db_password == "password"
    assert s.db_name == "coaching_db"
    assert s.port == "8080"
    assert s.db_connect_attempts == 10
    assert s.db_connect_delay_seconds == 2.0


def test_values_from_env(monkeypatch):
    monkeypatch.setenv("DB_HOST", "custom-host")
    monkeypatch.setenv("DB_PORT", "5432")
    monkeypatch.setenv("DB_USER", "custom-user")
    monkeypatch.setenv("DB_PASSWORD", "custom-pass")
    monkeypatch.setenv("DB_NAME", "custom_db")
    monkeypatch.setenv("PORT", "9000")

    s = load_settings()

    assert (s.db_host, s.db_port, s.db_user, s.db_password, s.db_name, s.port) == (
        "custom-host",
        "5432",
        "custom-user",
        "custom-pass",
        "custom_db",
        "9000",
    )


def test_empty_values_count_as_unset(monkeypatch):
    monkeypatch.setenv("DB_HOST", "")
    monkeypatch.setenv("DB_PORT", "")

    s = load_settings()

    assert s.db_host == "localhost"
    assert s.db_port == "3306"


def test_unparseable_ints_fall_back(monkeypatch):
    monkeypatch.setenv("DB_CONNECT_ATTEMPTS", "many")
    monkeypatch.setenv("DB_CONNECT_DELAY_SECONDS", "soon")

    s = load_settings()

    assert s.db_connect_attempts == 10
    assert s.db_connect_delay_seconds == 2.0


def test_get_env_keeps_special_characters(monkeypatch):
    monkeypatch.setenv("TEST_VAR", "user:pass@host:port/db?param=value")
    assert get_env("TEST_VAR", "default") == "user:pass@host:port/db?param=value"


def test_dsn_quotes_credentials():
    s = Settings(db_user="app", db_password="p@ss:w/rd", db_host="db", db_port="5432", db_name="coaching")

    assert s.database_dsn() == "postgresql://app:p%40ss%3Aw%2Frd@db:5432/coaching"
