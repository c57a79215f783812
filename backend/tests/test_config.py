"""Settings — defaults and database URL rewriting."""

import pytest

from app.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.jwt_expires_in
    assert settings.default_team_id == 1
    assert settings.database_pool_size == 20
    assert settings.log_format == "json"


@pytest.mark.parametrize("url,expected", [
    ("postgresql://u:p@db:5432/hive", "postgresql+asyncpg://u:p@db:5432/hive"),
    ("postgres://u:p@db/hive", "postgresql+asyncpg://u:p@db/hive"),
    ("mysql://u:p@db:3306/hive", "mysql+aiomysql://u:p@db:3306/hive"),
    ("postgresql+asyncpg://u:p@db/hive", "postgresql+asyncpg://u:p@db/hive"),
    ("sqlite+aiosqlite:///local.db", "sqlite+aiosqlite:///local.db"),
])
def test_database_url_uses_async_driver(url, expected):
    assert Settings(_env_file=None, database_url=url).database_url == expected


def test_empty_database_url_means_none():
    assert Settings(_env_file=None, database_url="").database_url is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("DEFAULT_TEAM_ID", "9")
    settings = Settings(_env_file=None)
    assert settings.jwt_secret == "from-env"
    assert settings.default_team_id == 9
