"""
Shared fixtures
"""
from unittest.mock import MagicMock

import pytest

from poolsync.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings that do not open a connection while building"""
    return Settings(verify_on_build=False)


@pytest.fixture
def sqlite_settings() -> Settings:
    """Settings for file-backed SQLite data sources"""
    return Settings(default_data_source_class="sqlite", pool_size=2, max_overflow=0)


@pytest.fixture
def make_engine():
    """Factory for engine mocks that record executed DDL"""

    def factory(error: Exception = None) -> MagicMock:
        engine = MagicMock(name="engine")
        connection = engine.begin.return_value.__enter__.return_value
        if error is not None:
            connection.exec_driver_sql.side_effect = error
        return engine

    return factory

