"""
Tests for Settings (environment loading) and StoreConfig (connection URL).
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from alumnos_api.config import Settings, StoreConfig

_ENV_NAMES = [
    "HOST",
    "PORT",
    "MYSQLHOST",
    "MYSQLPORT",
    "MYSQLUSER",
    "MYSQLPASSWORD",
    "MYSQL_DATABASE",
    "DATABASE_URL",
    "UPLOAD_DIR",
    "LOG_LEVEL",
    "CORS_ORIGINS",
    "ACCESS_LOG_PATH",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the settings read, including the suite's overrides."""
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettingsDefaults:

    def test_development_defaults(self, clean_env):
        s = Settings(_env_file=None)

        assert s.port == 3001
        assert s.mysql_host == "localhost"
        assert s.mysql_port == 3306
        assert s.mysql_user == "root"
        assert s.mysql_password == ""
        assert s.mysql_database == "alumnos"
        assert s.database_url is None
        assert s.upload_dir == "./archivos"
        assert s.log_level == "INFO"
        assert s.cors_origins_list == ["*"]

    def test_default_store_url_targets_mysql(self, clean_env):
        url = Settings(_env_file=None).store_config().sqlalchemy_url()

        assert url.drivername == "mysql+aiomysql"
        assert url.username == "root"
        assert url.password is None
        assert url.host == "localhost"
        assert url.port == 3306
        assert url.database == "alumnos"


class TestEnvironmentNames:

    def test_deployment_variable_names(self, clean_env):
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("MYSQLHOST", "db.internal")
        clean_env.setenv("MYSQLPORT", "3307")
        clean_env.setenv("MYSQLUSER", "escolar")
        clean_env.setenv("MYSQLPASSWORD", "s3cret")
        clean_env.setenv("MYSQL_DATABASE", "control_escolar")

        s = Settings(_env_file=None)
        url = s.store_config().sqlalchemy_url()

        assert s.port == 8080
        assert url.host == "db.internal"
        assert url.port == 3307
        assert url.username == "escolar"
        assert url.password == "s3cret"
        assert url.database == "control_escolar"

    def test_database_url_overrides_mysql_fields(self, clean_env):
        clean_env.setenv("MYSQLHOST", "ignored")
        clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///./alumnos.db")

        url = Settings(_env_file=None).store_config().sqlalchemy_url()

        assert url.drivername == "sqlite+aiosqlite"
        assert url.database == "./alumnos.db"

    def test_log_level_is_normalized(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")

        s = Settings(_env_file=None)

        assert s.log_level == "DEBUG"
        assert s.store_config().echo is True

    def test_invalid_log_level_is_rejected(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None)

    def test_cors_origins_list(self, clean_env):
        clean_env.setenv("CORS_ORIGINS", "http://localhost:3000, https://escuela.mx")

        assert Settings(_env_file=None).cors_origins_list == [
            "http://localhost:3000",
            "https://escuela.mx",
        ]


class TestStoreConfig:

    def test_store_config_is_immutable(self):
        config = StoreConfig()

        with pytest.raises(PydanticValidationError):
            config.host = "elsewhere"

    def test_pool_settings_flow_from_settings(self, clean_env):
        clean_env.setenv("DB_POOL_SIZE", "3")
        clean_env.setenv("DB_MAX_OVERFLOW", "0")

        config = Settings(_env_file=None).store_config()

        assert config.pool_size == 3
        assert config.max_overflow == 0
