"""
Configuration and logging tests
"""
import logging

from poolsync.config import Settings
from poolsync.utils.logger import get_logger, log_database_connection_error, mask_secrets


class TestSettings:
    """Settings"""

    def test_from_env(self, monkeypatch):
        """POOLSYNC_* variables override the defaults"""
        monkeypatch.setenv("POOLSYNC_POOL_SIZE", "12")
        monkeypatch.setenv("POOLSYNC_POOL_PRE_PING", "false")
        monkeypatch.setenv("POOLSYNC_DEFAULT_DRIVER", "sqlite")
        settings = Settings.from_env()
        assert settings.pool_size == 12
        assert settings.pool_pre_ping is False
        assert settings.default_data_source_class == "sqlite"
        assert settings.max_overflow == 10

    def test_engine_options(self):
        """Pool settings become create_engine arguments"""
        options = Settings(pool_size=2).engine_options()
        assert options == {
            "pool_size": 2,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
        }


class TestLogger:
    """Logging helpers"""

    def test_package_logger(self):
        """Module loggers live under the package logger"""
        logger = get_logger("poolsync.services.example")
        assert logger.name == "poolsync.services.example"
        assert logging.getLogger("poolsync").handlers

    def test_mask_secrets(self):
        """Password-like values are masked"""
        masked = mask_secrets({"user": "u", "password": "p", "db_secret": "s"})
        assert masked == {"user": "u", "password": "***", "db_secret": "***"}

    def test_mask_secrets_nested(self):
        """Secrets inside nested mappings are masked too"""
        masked = mask_secrets({"user": "u", "properties": {"password": "p", "ssl": True}})
        assert masked == {"user": "u", "properties": {"password": "***", "ssl": True}}

    def test_connection_error_hides_password(self, caplog):
        """Connection failures are logged without the password"""
        caplog.set_level(logging.ERROR, logger="poolsync")
        logger = get_logger("poolsync.tests")
        try:
            raise RuntimeError("refused")
        except RuntimeError as e:
            log_database_connection_error(logger, {"data_source_id": "main", "password": "hunter2"}, e)
        assert caplog.records
        assert "hunter2" not in caplog.text
        assert "refused" in caplog.text
