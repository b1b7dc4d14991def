"""
test_database_config.py — DB_* validation and TLS context construction.
"""

import ssl

import pytest
from conftest import make_settings

from trashvision.core.database import (
    REQUIRED_KEYS,
    DatabaseConfig,
    MissingConfigError,
    build_ssl_context,
    check_database_config,
)


class TestFromSettings:

    def test_complete_settings_build_config(self):
        config = DatabaseConfig.from_settings(make_settings())
        assert config.host == "db.example.test"
        assert config.port == 3306
        assert config.user == "trash"
        assert config.password == "secret"
        assert config.database == "trashvision"

    @pytest.mark.parametrize("attr,key", list(REQUIRED_KEYS.items()))
    def test_missing_key_is_named(self, attr, key):
        with pytest.raises(MissingConfigError) as exc_info:
            DatabaseConfig.from_settings(make_settings(**{attr: ""}))
        assert exc_info.value.key == key
        assert str(exc_info.value) == f"Missing environment variable: {key}"

    def test_whitespace_only_counts_as_missing(self):
        with pytest.raises(MissingConfigError) as exc_info:
            DatabaseConfig.from_settings(make_settings(db_host="   "))
        assert exc_info.value.key == "host"

    def test_first_missing_key_wins(self):
        with pytest.raises(MissingConfigError) as exc_info:
            DatabaseConfig.from_settings(make_settings(db_user="", db_name=""))
        assert exc_info.value.key == "user"

    @pytest.mark.parametrize("port", ["abc", "33o6", "-1", "0"])
    def test_unusable_port_reported_as_missing(self, port):
        with pytest.raises(MissingConfigError) as exc_info:
            DatabaseConfig.from_settings(make_settings(db_port=port))
        assert exc_info.value.key == "port"

    def test_tls_flags_carried_over(self):
        config = DatabaseConfig.from_settings(
            make_settings(db_ssl_verify=False, db_connect_timeout=3.5)
        )
        assert config.use_ssl is True
        assert config.verify_ssl is False
        assert config.connect_timeout == 3.5


class TestSslContext:

    def test_strict_by_default(self):
        ctx = build_ssl_context(DatabaseConfig.from_settings(make_settings()))
        assert isinstance(ctx, ssl.SSLContext)
        assert ctx.verify_mode == ssl.CERT_REQUIRED
        assert ctx.check_hostname is True

    def test_relaxed_trust_accepts_any_certificate(self):
        config = DatabaseConfig.from_settings(make_settings(db_ssl_verify=False))
        ctx = build_ssl_context(config)
        assert ctx.verify_mode == ssl.CERT_NONE
        assert ctx.check_hostname is False

    def test_tls_off_returns_none(self):
        config = DatabaseConfig.from_settings(make_settings(db_ssl=False))
        assert build_ssl_context(config) is None


class TestCheckDatabaseConfig:

    def test_configured(self):
        assert check_database_config(make_settings()) == "configured"

    def test_unconfigured(self):
        assert check_database_config(make_settings(db_host="")) == "unconfigured"
