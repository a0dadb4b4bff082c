"""
Exceptions raised by poolsync
"""
from typing import Optional


class PoolSyncError(Exception):
    """Base class for all poolsync errors"""


class InvalidArgumentError(PoolSyncError, ValueError):
    """Malformed credential or schema input"""


class DataSourceNotFoundError(PoolSyncError, KeyError):
    """A data source id that is not in the pool registry"""

    def __init__(self, data_source_id: str):
        self.data_source_id = data_source_id
        super().__init__(f"Data source with ID '{data_source_id}' does not exist.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class NoDataSourcesError(PoolSyncError, RuntimeError):
    """The pool registry is empty"""

    def __init__(self, message: str = "No data sources available"):
        super().__init__(message)


class SchemaExecutionError(PoolSyncError, RuntimeError):
    """A generated CREATE TABLE statement could not be applied"""

    def __init__(self, statement: str, data_source_id: Optional[str] = None):
        self.statement = statement
        self.data_source_id = data_source_id
        super().__init__(f"Failed to execute query: {statement}")


class PoolCreationError(PoolSyncError, RuntimeError):
    """The connection pool for a data source could not be created"""

    def __init__(self, data_source_id: str, reason: str):
        self.data_source_id = data_source_id
        self.reason = reason
        super().__init__(
            f"Failed to create connection pool for data source '{data_source_id}': {reason}"
        )
