"""
Database adapter base class
Defines the interface every adapter implements
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from sqlalchemy.engine import URL


class DatabaseAdapter(ABC):
    """Database adapter base class"""

    default_driver: str = ""

    def __init__(self, driver_name: Optional[str] = None):
        """
        Args:
            driver_name: SQLAlchemy driver name such as 'mysql+pymysql';
                         the adapter default is used when None
        """
        self.driver_name = driver_name or self.default_driver

    @abstractmethod
    def get_connection_url(self, config: Any) -> URL:
        """
        Build the connection URL

        Args:
            config: pool configuration with server_name, port,
                    database_name, user and password

        Returns:
            SQLAlchemy URL
        """
        pass

    @abstractmethod
    def get_connect_args(self) -> Dict[str, Any]:
        """
        Driver arguments applied before data source properties

        Returns:
            connect_args dictionary
        """
        pass

    def get_driver_name(self) -> str:
        """SQLAlchemy driver name, e.g. 'mysql+pymysql'"""
        return self.driver_name

    def get_db_type(self) -> str:
        """
        Dialect name

        Returns:
            e.g. 'mysql', 'sqlite'
        """
        return self.driver_name.split("+", 1)[0]
