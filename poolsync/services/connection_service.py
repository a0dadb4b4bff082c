"""
Connection service
Runtime access to the pooled data sources
"""
from typing import Dict, Iterable, List, Mapping, Optional

from sqlalchemy.engine import Connection, Engine

from ..errors import DataSourceNotFoundError, NoDataSourcesError
from ..models.schema import TableSchema
from ..utils.logger import get_logger
from .table_synchronizer import SyncReport, TableSynchronizer

logger = get_logger(__name__)


class ConnectionService:
    """
    Pool registry with its tables synchronized

    Tables are created once, in the constructor, before any connection is
    handed out. The registry does not change afterwards.
    """

    def __init__(self, engines: Mapping[str, Engine], schemas: Iterable[TableSchema] = ()):
        """
        Args:
            engines: data source id -> pooled engine
            schemas: described types to create tables for

        Raises:
            SchemaExecutionError: if a CREATE TABLE statement fails
        """
        self._engines: Dict[str, Engine] = dict(engines)
        self.sync_report: SyncReport = TableSynchronizer(self._engines, schemas).synchronize()

    @property
    def data_source_ids(self) -> List[str]:
        """Registered data source ids"""
        return list(self._engines.keys())

    @property
    def unhandled_types(self) -> List[str]:
        """Described types that matched no data source"""
        return list(self.sync_report.unhandled)

    def get_engine(self, data_source_id: str) -> Engine:
        """
        Pooled engine of a data source

        Raises:
            DataSourceNotFoundError: if the id is not registered
        """
        engine = self._engines.get(data_source_id)
        if engine is None:
            raise DataSourceNotFoundError(data_source_id)
        return engine

    def get_connection(self, data_source_id: Optional[str] = None) -> Connection:
        """
        Check out a connection

        The caller owns the connection and must close it, e.g.
        `with service.get_connection("main") as conn: ...`

        Args:
            data_source_id: data source to use; any registered one when None

        Returns:
            SQLAlchemy connection from the pool

        Raises:
            DataSourceNotFoundError: if the id is not registered
            NoDataSourcesError: if no id is given and the registry is empty
        """
        if data_source_id is not None:
            return self.get_engine(data_source_id).connect()

        if not self._engines:
            raise NoDataSourcesError()
        engine = next(iter(self._engines.values()))
        return engine.connect()

    def dispose(self, data_source_id: Optional[str] = None):
        """
        Close the pooled connections of one data source, or of all when None

        Engines stay registered and reopen connections on the next checkout.
        """
        if data_source_id is not None:
            self.get_engine(data_source_id).dispose()
            logger.info(f"Disposed connection pool: {data_source_id}")
            return
        for engine in self._engines.values():
            engine.dispose()
        logger.info("Disposed all connection pools")
