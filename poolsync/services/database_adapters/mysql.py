"""
MySQL adapter
"""
from typing import Any, Dict

from sqlalchemy.engine import URL

from .base import DatabaseAdapter


class MySQLAdapter(DatabaseAdapter):
    """MySQL adapter, PyMySQL by default"""

    default_driver = "mysql+pymysql"

    def get_connection_url(self, config: Any) -> URL:
        """Build a MySQL connection URL"""
        return URL.create(
            self.driver_name,
            username=config.user or None,
            password=config.password or None,
            host=config.server_name,
            port=config.port,
            database=config.database_name,
        )

    def get_connect_args(self) -> Dict[str, Any]:
        """MySQL driver arguments"""
        return {}
