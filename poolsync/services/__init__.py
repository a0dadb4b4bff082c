"""
Services
"""
from .connection_service import ConnectionService
from .pool_builder import DataSourceConfig, PoolConfig, PoolRegistryBuilder
from .schema_registry import SchemaRegistry
from .table_synchronizer import (
    SyncReport,
    TableSynchronizer,
    build_column_clause,
    build_create_table_statement,
)

__all__ = [
    "ConnectionService",
    "DataSourceConfig",
    "PoolConfig",
    "PoolRegistryBuilder",
    "SchemaRegistry",
    "SyncReport",
    "TableSynchronizer",
    "build_column_clause",
    "build_create_table_statement",
]
