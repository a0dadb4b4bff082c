"""
Table synchronizer
Creates the table of every described type on the data source it belongs to
"""
from typing import Dict, Iterable, List, Mapping

from pydantic import BaseModel, Field
from sqlalchemy.engine import Engine

from ..errors import SchemaExecutionError
from ..models.schema import ColumnSpec, TableSchema
from ..utils.logger import get_logger, log_sql_error

logger = get_logger(__name__)


class SyncReport(BaseModel):
    """Outcome of one synchronization run"""
    executed: Dict[str, List[str]] = Field(default_factory=dict)  # data source id -> statements
    unhandled: List[str] = Field(default_factory=list)  # fully-qualified type names


def build_column_clause(column: ColumnSpec, snake_case: bool) -> str:
    """
    Column definition for one field

    Args:
        column: column attributes
        snake_case: naming convention of the owning table

    Returns:
        e.g. "user_id INT PRIMARY KEY AUTO_INCREMENT NOT NULL"
    """
    parts = [column.resolve_column_name(snake_case), column.sql_type()]
    if column.primary_key:
        parts.append("PRIMARY KEY")
        if column.auto_increment:
            parts.append("AUTO_INCREMENT")
    parts.append("NULL" if column.nullable else "NOT NULL")
    if column.unique:
        parts.append("UNIQUE")
    if column.default_value is not None:
        parts.append(f"DEFAULT {column.default_value}")
    if column.on_update is not None:
        parts.append(f"ON UPDATE {column.on_update}")
    return " ".join(parts)


def build_create_table_statement(schema: TableSchema) -> str:
    """
    CREATE TABLE IF NOT EXISTS statement for a schema

    Args:
        schema: the table schema

    Returns:
        the DDL text, one clause per line
    """
    clauses = [build_column_clause(column, schema.snake_case) for column in schema.persistent_columns]
    if schema.primary_key:
        clauses.append(f"PRIMARY KEY ({', '.join(schema.primary_key)})")
    if schema.unique:
        clauses.append(f"UNIQUE ({', '.join(schema.unique)})")

    body = ",\n".join(f"  {clause}" for clause in clauses)
    return f"CREATE TABLE IF NOT EXISTS {schema.table_name} (\n{body}\n);"


class TableSynchronizer:
    """Routes each schema's DDL to the pool of its data source"""

    def __init__(self, engines: Mapping[str, Engine], schemas: Iterable[TableSchema]):
        """
        Args:
            engines: pool registry, data source id -> engine
            schemas: described types to synchronize
        """
        self.engines = engines
        self.schemas = list(schemas)

    def synchronize(self) -> SyncReport:
        """
        Create missing tables on every data source

        Returns:
            SyncReport with the executed statements and the unhandled types

        Raises:
            SchemaExecutionError: on the first statement that fails
        """
        report = SyncReport()
        handled = set()

        for data_source_id, engine in self.engines.items():
            matched = [schema for schema in self.schemas if schema.matches(data_source_id)]
            if not matched:
                continue

            statements = []
            for schema in matched:
                statement = build_create_table_statement(schema)
                self._execute(engine, data_source_id, statement)
                statements.append(statement)
                handled.add(schema.type_name)
                logger.debug(f"Table '{schema.table_name}' ensured on data source {data_source_id}")
            report.executed[data_source_id] = statements

        report.unhandled = sorted({schema.type_name for schema in self.schemas} - handled)
        if report.unhandled:
            logger.warning(
                f"The following classes were not handled by any data source: {', '.join(report.unhandled)}"
            )
        return report

    @staticmethod
    def _execute(engine: Engine, data_source_id: str, statement: str) -> None:
        try:
            with engine.begin() as connection:
                connection.exec_driver_sql(statement)
        except Exception as e:
            log_sql_error(logger, statement, data_source_id, e)
            raise SchemaExecutionError(statement, data_source_id) from e
