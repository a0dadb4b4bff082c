"""
Schema registry
Collects the TableSchemas the synchronizer creates tables for, either
registered one by one or discovered by scanning a package.
"""
import importlib
import inspect
import pkgutil
from types import ModuleType
from typing import Dict, List, Union

from ..errors import InvalidArgumentError
from ..models.schema import TableSchema, schema_of
from ..utils.logger import get_logger

logger = get_logger(__name__)


class SchemaRegistry:
    """Described types keyed by fully-qualified type name"""

    def __init__(self):
        self._schemas: Dict[str, TableSchema] = {}

    def register(self, schema: Union[TableSchema, type]) -> TableSchema:
        """
        Register a schema or a class decorated with @table

        A later registration for the same type name replaces the earlier one.

        Args:
            schema: TableSchema or described class

        Returns:
            the registered TableSchema

        Raises:
            InvalidArgumentError: if a class carries no table schema
        """
        if isinstance(schema, type):
            described = schema_of(schema)
            if described is None:
                raise InvalidArgumentError(
                    f"{schema.__module__}.{schema.__qualname__} is not decorated with @table"
                )
            schema = described
        elif not isinstance(schema, TableSchema):
            raise InvalidArgumentError(f"Expected a TableSchema or a class, got {type(schema).__name__}")

        self._schemas[schema.type_name] = schema
        return schema

    def scan(self, package: Union[str, ModuleType]) -> List[TableSchema]:
        """
        Import a package with all its sub-modules and register every
        described class defined in them

        Args:
            package: package (or plain module) object or dotted name

        Returns:
            schemas found by this scan
        """
        if isinstance(package, str):
            package = importlib.import_module(package)

        modules = [package]
        if hasattr(package, "__path__"):
            for module_info in pkgutil.walk_packages(package.__path__, prefix=f"{package.__name__}."):
                modules.append(importlib.import_module(module_info.name))

        found = []
        for module in modules:
            for _, member in inspect.getmembers(module, inspect.isclass):
                if member.__module__ != module.__name__:
                    continue
                if schema_of(member) is not None:
                    found.append(self.register(member))

        logger.debug(f"Scanned {package.__name__}: {len(found)} described types")
        return found

    def schemas(self) -> List[TableSchema]:
        """Registered schemas in registration order"""
        return list(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._schemas
