"""
poolsync

Named registry of pooled database connections that creates the tables of
declaratively described types on startup.

    service = (
        PoolRegistryBuilder.create("myapp.models")
        .set_credentials({"id": "main", "host": "db1", "database_name": "shop",
                          "user": "u", "password": "p"})
        .build()
    )
    with service.get_connection("main") as conn:
        ...
"""
from .config import Settings, get_settings
from .errors import (
    PoolSyncError,
    InvalidArgumentError,
    DataSourceNotFoundError,
    NoDataSourcesError,
    SchemaExecutionError,
    PoolCreationError,
)
from .models import (
    DatabaseCredentials,
    ColumnSpec,
    TableSchema,
    column,
    table,
    schema_of,
    BigInt,
    SmallInt,
    TinyInt,
    Float32,
    Timestamp,
)
from .services import (
    ConnectionService,
    PoolRegistryBuilder,
    SchemaRegistry,
    SyncReport,
    TableSynchronizer,
    build_create_table_statement,
)

__all__ = [
    "Settings",
    "get_settings",
    "PoolSyncError",
    "InvalidArgumentError",
    "DataSourceNotFoundError",
    "NoDataSourcesError",
    "SchemaExecutionError",
    "PoolCreationError",
    "DatabaseCredentials",
    "ColumnSpec",
    "TableSchema",
    "column",
    "table",
    "schema_of",
    "BigInt",
    "SmallInt",
    "TinyInt",
    "Float32",
    "Timestamp",
    "ConnectionService",
    "PoolRegistryBuilder",
    "SchemaRegistry",
    "SyncReport",
    "TableSynchronizer",
    "build_create_table_statement",
]
