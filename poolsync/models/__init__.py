"""
Data models
"""
from .credentials import DatabaseCredentials, DEFAULT_PORT
from .schema import ColumnSpec, TableSchema, column, table, schema_of, to_snake_case
from .sql_types import BigInt, SmallInt, TinyInt, Float32, Timestamp, sql_type_for

__all__ = [
    "DatabaseCredentials",
    "DEFAULT_PORT",
    "ColumnSpec",
    "TableSchema",
    "column",
    "table",
    "schema_of",
    "to_snake_case",
    "BigInt",
    "SmallInt",
    "TinyInt",
    "Float32",
    "Timestamp",
    "sql_type_for",
]
