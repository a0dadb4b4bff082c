"""
Database adapter factory
Resolves a data source class name to an adapter instance
"""
from typing import Dict, Type

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .sqlite import SQLiteAdapter


class DatabaseAdapterFactory:
    """Database adapter factory"""

    # registered adapters by dialect
    _adapters: Dict[str, Type[DatabaseAdapter]] = {
        "mysql": MySQLAdapter,
        "sqlite": SQLiteAdapter,
    }

    @staticmethod
    def _dialect(class_name: str) -> str:
        return class_name.split("+", 1)[0].strip().lower()

    @classmethod
    def get_adapter(cls, class_name: str) -> DatabaseAdapter:
        """
        Get the adapter for a data source class name

        Args:
            class_name: dialect ('mysql') or dialect+driver ('mysql+mysqldb')

        Returns:
            adapter instance; the explicit driver is kept when one is given

        Raises:
            ValueError: if the dialect is not supported
        """
        adapter_class = cls._adapters.get(cls._dialect(class_name))

        if not adapter_class:
            raise ValueError(
                f"Unsupported data source class: {class_name}. "
                f"Supported: {', '.join(cls._adapters.keys())}"
            )

        driver_name = class_name.strip().lower() if "+" in class_name else None
        return adapter_class(driver_name)

    @classmethod
    def register_adapter(cls, dialect: str, adapter_class: Type[DatabaseAdapter]):
        """
        Register an adapter for another dialect

        Args:
            dialect: dialect name
            adapter_class: adapter class
        """
        cls._adapters[dialect.lower()] = adapter_class

    @classmethod
    def get_supported_types(cls) -> list:
        """Registered dialect names"""
        return list(cls._adapters.keys())

    @classmethod
    def is_supported(cls, class_name: str) -> bool:
        """
        Whether a data source class name resolves to an adapter

        Args:
            class_name: dialect or dialect+driver
        """
        return cls._dialect(class_name) in cls._adapters
