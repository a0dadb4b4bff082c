"""
Pool registry builder
Accumulates per-data-source configuration and creates one connection
pool per data source id
"""
from types import ModuleType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from ..config import Settings, get_settings
from ..errors import InvalidArgumentError, PoolCreationError
from ..models.credentials import DEFAULT_PORT, DatabaseCredentials
from ..models.schema import TableSchema
from ..utils.logger import get_logger, log_database_connection_error
from .connection_service import ConnectionService
from .database_adapters import DatabaseAdapterFactory
from .schema_registry import SchemaRegistry

logger = get_logger(__name__)

# Properties with these keys configure the pool; all others go to the driver
POOL_OPTION_KEYS = frozenset({
    "pool_size",
    "max_overflow",
    "pool_timeout",
    "pool_recycle",
    "pool_pre_ping",
    "pool_use_lifo",
    "pool_reset_on_return",
    "isolation_level",
    "echo",
    "echo_pool",
})

CredentialsInput = Union[
    DatabaseCredentials,
    Mapping[str, Any],
    Sequence[Union[DatabaseCredentials, Mapping[str, Any]]],
]


class PoolConfig(BaseModel):
    """Finalized configuration of one data source"""
    model_config = ConfigDict(frozen=True)

    data_source_id: str
    data_source_class_name: str
    server_name: Optional[str] = None
    database_name: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    port: int = DEFAULT_PORT
    properties: Dict[str, Any] = Field(default_factory=dict)

    def split_properties(self) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Separate pool options from driver properties

        Returns:
            (create_engine keyword arguments, driver connect_args)
        """
        pool_options = {}
        driver_properties = {}
        for key, value in self.properties.items():
            if key in POOL_OPTION_KEYS:
                pool_options[key] = value
            else:
                driver_properties[key] = value
        return pool_options, driver_properties


class DataSourceConfig:
    """Mutable configuration of one data source while the builder runs"""

    def __init__(self, data_source_id: str, data_source_class_name: str):
        self.data_source_id = data_source_id
        self.data_source_class_name = data_source_class_name
        self.server_name: Optional[str] = None
        self.database_name: Optional[str] = None
        self.user: Optional[str] = None
        self.password: Optional[str] = None
        self.port: int = DEFAULT_PORT
        self.properties: Dict[str, Any] = {}

    def sync_credentials(self, credentials: DatabaseCredentials):
        """Overwrite the connection fields from a credentials record"""
        self.server_name = credentials.host
        self.database_name = credentials.database_name
        self.user = credentials.user
        self.password = credentials.password
        self.port = credentials.port

    def finalize(self, default_properties: Optional[Mapping[str, Any]] = None) -> PoolConfig:
        """
        Freeze the configuration

        Args:
            default_properties: global properties; properties set on this
                                data source win over them

        Returns:
            PoolConfig
        """
        properties = dict(default_properties or {})
        properties.update(self.properties)
        return PoolConfig(
            data_source_id=self.data_source_id,
            data_source_class_name=self.data_source_class_name,
            server_name=self.server_name,
            database_name=self.database_name,
            user=self.user,
            password=self.password,
            port=self.port,
            properties=properties,
        )

    def __repr__(self):
        return f"<DataSourceConfig(id={self.data_source_id}, host={self.server_name}, db={self.database_name})>"


class PoolRegistryBuilder:
    """
    Builder for a ConnectionService

    Every per-data-source setter creates the entry on first use, so calls
    can come in any order. build() creates the pools and synchronizes the
    tables of all registered or scanned schemas.
    """

    def __init__(
        self,
        package: Optional[Union[str, ModuleType]] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            package: package scanned for @table classes at build time
            settings: pool defaults, the global settings when None
        """
        self.package = package
        self.settings = settings or get_settings()
        self.schema_registry = SchemaRegistry()
        self._configs: Dict[str, DataSourceConfig] = {}
        self._default_properties: Dict[str, Any] = {}

    @classmethod
    def create(
        cls,
        package: Optional[Union[str, ModuleType]] = None,
        settings: Optional[Settings] = None,
    ) -> "PoolRegistryBuilder":
        """New builder scanning `package` for described types"""
        return cls(package=package, settings=settings)

    def _config(self, data_source_id: str) -> DataSourceConfig:
        config = self._configs.get(data_source_id)
        if config is None:
            config = DataSourceConfig(data_source_id, self.settings.default_data_source_class)
            self._configs[data_source_id] = config
        return config

    @property
    def data_source_ids(self):
        """Ids configured so far"""
        return list(self._configs.keys())

    def get_config(self, data_source_id: str) -> Optional[DataSourceConfig]:
        """Current configuration of a data source, None if unknown"""
        return self._configs.get(data_source_id)

    def set_default_properties(self, properties: Mapping[str, Any]) -> "PoolRegistryBuilder":
        """
        Replace the global properties applied to every data source at build time

        Args:
            properties: property name -> value
        """
        self._default_properties = dict(properties)
        return self

    def set_credentials(self, credentials: CredentialsInput) -> "PoolRegistryBuilder":
        """
        Create or update data sources from credentials

        Args:
            credentials: a DatabaseCredentials, a mapping with the same keys,
                         or a list of either

        Raises:
            InvalidArgumentError: if an id is missing or empty, or an input
                                  is neither a record nor a mapping
        """
        if isinstance(credentials, DatabaseCredentials):
            return self._set_record(credentials)
        if isinstance(credentials, Mapping):
            return self._set_document(credentials)
        if isinstance(credentials, (list, tuple)):
            for element in credentials:
                if isinstance(element, DatabaseCredentials):
                    self._set_record(element)
                elif isinstance(element, Mapping):
                    self._set_document(element)
                else:
                    raise InvalidArgumentError("Element in provided array is not an object")
            return self
        raise InvalidArgumentError(
            f"Unsupported credentials input: {type(credentials).__name__}"
        )

    def _set_record(self, credentials: DatabaseCredentials) -> "PoolRegistryBuilder":
        if not credentials.id:
            raise InvalidArgumentError("Credentials ID cannot be null or empty")
        self._config(credentials.id).sync_credentials(credentials)
        return self

    def _set_document(self, document: Mapping[str, Any]) -> "PoolRegistryBuilder":
        if document.get("id") is None:
            raise InvalidArgumentError("Provided object has no id provided")
        try:
            credentials = DatabaseCredentials.model_validate(dict(document))
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid credentials object: {e}") from e
        return self._set_record(credentials)

    def set_server_name(self, data_source_id: str, server_name: str) -> "PoolRegistryBuilder":
        self._config(data_source_id).server_name = server_name
        return self

    def set_database_name(self, data_source_id: str, database_name: str) -> "PoolRegistryBuilder":
        self._config(data_source_id).database_name = database_name
        return self

    def set_user(self, data_source_id: str, user: str) -> "PoolRegistryBuilder":
        self._config(data_source_id).user = user
        return self

    def set_password(self, data_source_id: str, password: str) -> "PoolRegistryBuilder":
        self._config(data_source_id).password = password
        return self

    def set_port(self, data_source_id: str, port: int) -> "PoolRegistryBuilder":
        self._config(data_source_id).port = port
        return self

    def set_data_source_class_name(
        self,
        class_name: str,
        data_source_id: Optional[str] = None,
    ) -> "PoolRegistryBuilder":
        """
        Set the SQLAlchemy dialect/driver ('mysql+pymysql', 'sqlite', ...)

        Args:
            class_name: dialect or dialect+driver
            data_source_id: target data source; every data source known
                            so far when None

        Raises:
            InvalidArgumentError: if no adapter supports the dialect
        """
        if not DatabaseAdapterFactory.is_supported(class_name):
            raise InvalidArgumentError(
                f"Unsupported data source class: {class_name}. "
                f"Supported: {', '.join(DatabaseAdapterFactory.get_supported_types())}"
            )
        if data_source_id is not None:
            self._config(data_source_id).data_source_class_name = class_name
            return self
        for config in self._configs.values():
            config.data_source_class_name = class_name
        return self

    def add_data_source_property(
        self,
        name: str,
        value: Any,
        data_source_id: Optional[str] = None,
    ) -> "PoolRegistryBuilder":
        """
        Set a pool or driver property

        Args:
            name: property name
            value: property value
            data_source_id: target data source; every data source known
                            so far when None
        """
        if data_source_id is not None:
            self._config(data_source_id).properties[name] = value
            return self
        for config in self._configs.values():
            config.properties[name] = value
        return self

    def register_schema(self, schema: Union[TableSchema, type]) -> "PoolRegistryBuilder":
        """Register a TableSchema or an @table class for synchronization"""
        self.schema_registry.register(schema)
        return self

    def scan_package(self, package: Union[str, ModuleType]) -> "PoolRegistryBuilder":
        """Register every @table class found in a package"""
        self.schema_registry.scan(package)
        return self

    def build(self) -> ConnectionService:
        """
        Create the pools and synchronize the tables

        Returns:
            ConnectionService over the created pools

        Raises:
            PoolCreationError: if a pool cannot be created
            SchemaExecutionError: if a CREATE TABLE statement fails
        """
        if self.package is not None:
            self.schema_registry.scan(self.package)

        engines: Dict[str, Engine] = {}
        for data_source_id, config in self._configs.items():
            pool_config = config.finalize(self._default_properties)
            engines[data_source_id] = self._create_engine(pool_config)
            logger.info(f"Connection established for data source with ID: {data_source_id}")

        return ConnectionService(engines, self.schema_registry.schemas())

    def _create_engine(self, config: PoolConfig) -> Engine:
        adapter = None
        try:
            adapter = DatabaseAdapterFactory.get_adapter(config.data_source_class_name)
            pool_options, driver_properties = config.split_properties()

            connect_args = adapter.get_connect_args()
            connect_args.update(driver_properties)
            engine_options = self.settings.engine_options()
            engine_options.update(pool_options)

            engine = create_engine(
                adapter.get_connection_url(config),
                poolclass=QueuePool,
                connect_args=connect_args,
                **engine_options
            )

            if self.settings.verify_on_build:
                with engine.connect():
                    pass
            return engine
        except Exception as e:
            context = config.model_dump()
            if adapter is not None:
                context["db_type"] = adapter.get_db_type()
                context["driver"] = adapter.get_driver_name()
            log_database_connection_error(logger, context, e)
            raise PoolCreationError(config.data_source_id, str(e)) from e
