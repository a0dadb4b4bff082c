"""
SQLite adapter
The database name is the path of the database file.
"""
from typing import Any, Dict

from sqlalchemy.engine import URL

from .base import DatabaseAdapter


class SQLiteAdapter(DatabaseAdapter):
    """SQLite adapter"""

    default_driver = "sqlite"

    def get_connection_url(self, config: Any) -> URL:
        """Build a SQLite connection URL; host, user and password are ignored"""
        return URL.create(self.driver_name, database=config.database_name)

    def get_connect_args(self) -> Dict[str, Any]:
        """SQLite driver arguments"""
        return {"check_same_thread": False}
