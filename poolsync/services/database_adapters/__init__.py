"""
Database adapters
Build SQLAlchemy connection URLs and driver arguments per dialect
"""
from .base import DatabaseAdapter
from .factory import DatabaseAdapterFactory
from .mysql import MySQLAdapter
from .sqlite import SQLiteAdapter

__all__ = [
    'DatabaseAdapter',
    'DatabaseAdapterFactory',
    'MySQLAdapter',
    'SQLiteAdapter',
]
