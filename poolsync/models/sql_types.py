"""
Python type to SQL column type mapping
"""
import types
import typing
import uuid
from datetime import date, datetime, time
from enum import Enum
from typing import Any, NewType, Tuple

# Width markers for annotations where the builtin type is ambiguous
BigInt = NewType("BigInt", int)
SmallInt = NewType("SmallInt", int)
TinyInt = NewType("TinyInt", int)
Float32 = NewType("Float32", float)
Timestamp = NewType("Timestamp", datetime)

DEFAULT_VARCHAR_LENGTH = 255
ENUM_SQL_TYPE = "VARCHAR(50)"
FALLBACK_SQL_TYPE = "LONGTEXT"

# Exact-type lookup, first match wins
SQL_TYPES: Tuple[Tuple[Any, str], ...] = (
    (int, "INT"),
    (BigInt, "BIGINT"),
    (SmallInt, "SMALLINT"),
    (TinyInt, "TINYINT"),
    (float, "DOUBLE"),
    (Float32, "FLOAT"),
    (bool, "BOOLEAN"),
    (Timestamp, "TIMESTAMP"),
    (datetime, "DATETIME"),
    (date, "DATE"),
    (time, "TIME"),
    (uuid.UUID, "CHAR(36)"),
    (bytes, "BLOB"),
    (bytearray, "BLOB"),
)


def unwrap_optional(python_type: Any) -> Any:
    """
    Strip a single None member from a union annotation

    Args:
        python_type: an annotation such as Optional[int] or int | None

    Returns:
        the non-None member, or the annotation unchanged
    """
    origin = typing.get_origin(python_type)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(python_type) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return python_type


def sql_type_for(python_type: Any, length: int = DEFAULT_VARCHAR_LENGTH) -> str:
    """
    Resolve the SQL column type for a Python annotation

    Args:
        python_type: field annotation
        length: VARCHAR length used for str fields

    Returns:
        SQL type text, LONGTEXT when nothing else matches
    """
    python_type = unwrap_optional(python_type)
    for candidate, sql_type in SQL_TYPES:
        if python_type is candidate:
            return sql_type
    if isinstance(python_type, type) and issubclass(python_type, Enum):
        return ENUM_SQL_TYPE
    if python_type is str:
        return f"VARCHAR({length})"
    return FALLBACK_SQL_TYPE
