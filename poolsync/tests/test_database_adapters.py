"""
Database adapter tests
"""
from types import SimpleNamespace

import pytest

from poolsync.services.database_adapters import (
    DatabaseAdapter,
    DatabaseAdapterFactory,
    MySQLAdapter,
    SQLiteAdapter,
)


def make_config(**overrides):
    values = dict(server_name="db1", port=3306, database_name="shop", user="root", password="p@ss:word")
    values.update(overrides)
    return SimpleNamespace(**values)


class TestDatabaseAdapterFactory:
    """DatabaseAdapterFactory"""

    def test_get_mysql_adapter(self):
        """mysql resolves to the PyMySQL driver"""
        adapter = DatabaseAdapterFactory.get_adapter("mysql")
        assert isinstance(adapter, MySQLAdapter)
        assert adapter.get_db_type() == "mysql"
        assert adapter.get_driver_name() == "mysql+pymysql"

    def test_explicit_driver_kept(self):
        """dialect+driver keeps the driver"""
        adapter = DatabaseAdapterFactory.get_adapter("MySQL+MySQLdb")
        assert isinstance(adapter, MySQLAdapter)
        assert adapter.get_driver_name() == "mysql+mysqldb"

    def test_get_sqlite_adapter(self):
        """sqlite resolves to the SQLite adapter"""
        adapter = DatabaseAdapterFactory.get_adapter("sqlite")
        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.get_driver_name() == "sqlite"

    def test_unsupported(self):
        """Unknown dialects raise ValueError"""
        with pytest.raises(ValueError, match="Unsupported data source class"):
            DatabaseAdapterFactory.get_adapter("mongodb")

    def test_is_supported(self):
        """Support check ignores the driver part and case"""
        assert DatabaseAdapterFactory.is_supported("MySQL+pymysql")
        assert DatabaseAdapterFactory.is_supported("sqlite")
        assert not DatabaseAdapterFactory.is_supported("oracle")

    def test_register_adapter(self):
        """New dialects can be registered"""

        class DuckAdapter(SQLiteAdapter):
            default_driver = "duckdb"

        DatabaseAdapterFactory.register_adapter("duckdb", DuckAdapter)
        try:
            assert isinstance(DatabaseAdapterFactory.get_adapter("duckdb"), DuckAdapter)
            assert "duckdb" in DatabaseAdapterFactory.get_supported_types()
        finally:
            DatabaseAdapterFactory._adapters.pop("duckdb")


class TestMySQLAdapter:
    """MySQLAdapter"""

    def test_connection_url(self):
        """All connection fields reach the URL, the password unescaped"""
        url = MySQLAdapter().get_connection_url(make_config())
        assert url.drivername == "mysql+pymysql"
        assert (url.host, url.port, url.database, url.username, url.password) == (
            "db1", 3306, "shop", "root", "p@ss:word"
        )

    def test_empty_credentials_omitted(self):
        """Empty user and password are left out"""
        url = MySQLAdapter().get_connection_url(make_config(user="", password=None))
        assert url.username is None
        assert url.password is None

    def test_connect_args(self):
        """No driver arguments by default"""
        assert MySQLAdapter().get_connect_args() == {}


class TestSQLiteAdapter:
    """SQLiteAdapter"""

    def test_connection_url(self):
        """The database name is the file path"""
        url = SQLiteAdapter().get_connection_url(make_config(database_name="/tmp/app.db"))
        assert url.drivername == "sqlite"
        assert url.database == "/tmp/app.db"
        assert url.host is None

    def test_connect_args(self):
        """Connections may cross threads"""
        assert SQLiteAdapter().get_connect_args() == {"check_same_thread": False}


def test_adapter_is_abstract():
    """DatabaseAdapter cannot be instantiated"""
    with pytest.raises(TypeError):
        DatabaseAdapter()
