"""
Table schema descriptors

A TableSchema describes the table a host class is stored in: the data
source it belongs to, the table name and one ColumnSpec per field. It can
be built directly or declared on a class with the @table decorator and
column() field helper:

    @table(data_source_id="main", snake_case=True)
    @dataclass
    class User:
        user_id: int = column(primary_key=True, auto_increment=True)
        email: str = column(unique=True, length=120)
"""
import dataclasses
import inspect
import re
import typing
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..errors import InvalidArgumentError
from .sql_types import DEFAULT_VARCHAR_LENGTH, sql_type_for

COLUMN_METADATA_KEY = "poolsync.column"
SCHEMA_ATTRIBUTE = "__table_schema__"

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")

T = TypeVar("T")


def to_snake_case(name: str) -> str:
    """userId -> user_id"""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", name).lower()


class ColumnSpec(BaseModel):
    """Column attributes of one declared field"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    python_type: Any = str
    column_name: Optional[str] = None
    nullable: bool = False
    length: int = DEFAULT_VARCHAR_LENGTH
    primary_key: bool = False
    auto_increment: bool = False
    unique: bool = False
    transient: bool = False
    default_value: Optional[str] = None  # SQL literal, rendered verbatim
    on_update: Optional[str] = None  # SQL literal, rendered verbatim

    @field_validator("default_value", "on_update", mode="before")
    @classmethod
    def _literal_as_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        return str(value)

    @field_validator("length")
    @classmethod
    def _positive_length(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("length must be positive")
        return value

    def resolve_column_name(self, snake_case: bool) -> str:
        """
        Column name used in DDL

        Args:
            snake_case: naming convention of the owning table

        Returns:
            the explicit column name, else the field name (snake_cased on request)
        """
        if self.column_name:
            return self.column_name
        return to_snake_case(self.name) if snake_case else self.name

    def sql_type(self) -> str:
        """SQL type of this column"""
        return sql_type_for(self.python_type, self.length)


class TableSchema(BaseModel):
    """Table-level metadata of a described type"""
    model_config = ConfigDict(frozen=True)

    type_name: str
    data_source_id: str
    table_name: str
    snake_case: bool = False
    columns: Tuple[ColumnSpec, ...] = ()
    primary_key: Optional[Tuple[str, ...]] = None
    unique: Optional[Tuple[str, ...]] = None

    @field_validator("type_name", "data_source_id", "table_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("primary_key", "unique")
    @classmethod
    def _non_empty_column_list(cls, value: Optional[Tuple[str, ...]]) -> Optional[Tuple[str, ...]]:
        if value is not None and len(value) == 0:
            raise ValueError("composite column list must not be empty")
        return value

    @model_validator(mode="after")
    def _has_clauses(self) -> "TableSchema":
        if not self.persistent_columns and not self.primary_key and not self.unique:
            raise ValueError(f"table '{self.table_name}' has no persistent columns")
        return self

    @property
    def persistent_columns(self) -> List[ColumnSpec]:
        """Columns that are stored, in declaration order"""
        return [column for column in self.columns if not column.transient]

    def column_names(self) -> List[str]:
        """Resolved names of the persistent columns"""
        return [column.resolve_column_name(self.snake_case) for column in self.persistent_columns]

    def matches(self, data_source_id: str) -> bool:
        """Whether this table belongs to the given data source (case-insensitive)"""
        return self.data_source_id.lower() == data_source_id.lower()

    @classmethod
    def from_class(
        cls,
        host: type,
        data_source_id: str,
        name: Optional[str] = None,
        snake_case: bool = False,
        primary_key: Optional[Sequence[str]] = None,
        unique: Optional[Sequence[str]] = None,
    ) -> "TableSchema":
        """
        Build a schema from a class's own annotated fields

        Field options come from column() declarations; a field without one
        gets the default column attributes. ClassVar annotations and
        inherited fields are ignored.

        Args:
            host: the described class
            data_source_id: id of the data source owning the table
            name: table name, defaults to the class name in lower case
            snake_case: derive column names in snake_case
            primary_key: composite primary-key column list
            unique: composite unique column list

        Returns:
            the TableSchema

        Raises:
            InvalidArgumentError: if the resulting schema is invalid
        """
        try:
            return cls(
                type_name=f"{host.__module__}.{host.__qualname__}",
                data_source_id=data_source_id,
                table_name=name or host.__name__.lower(),
                snake_case=snake_case,
                columns=tuple(_collect_columns(host)),
                primary_key=tuple(primary_key) if primary_key is not None else None,
                unique=tuple(unique) if unique is not None else None,
            )
        except (ValidationError, NameError) as e:
            # NameError: an annotation that cannot be resolved
            raise InvalidArgumentError(
                f"Invalid table schema for {host.__module__}.{host.__qualname__}: {e}"
            ) from e


def column(
    name: Optional[str] = None,
    *,
    nullable: bool = False,
    length: int = DEFAULT_VARCHAR_LENGTH,
    primary_key: bool = False,
    auto_increment: bool = False,
    unique: bool = False,
    transient: bool = False,
    default_value: Any = None,
    on_update: Any = None,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """
    Declare column options for a field

    Returns a dataclasses.field, so the class may be a dataclass or a
    plain annotated class. `default` and `default_factory` are the Python
    defaults of the field; `default_value` is the SQL DEFAULT literal.
    """
    options = {
        "column_name": name,
        "nullable": nullable,
        "length": length,
        "primary_key": primary_key,
        "auto_increment": auto_increment,
        "unique": unique,
        "transient": transient,
        "default_value": default_value,
        "on_update": on_update,
    }
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata={COLUMN_METADATA_KEY: options},
    )


def table(
    data_source_id: str,
    name: Optional[str] = None,
    snake_case: bool = False,
    primary_key: Optional[Sequence[str]] = None,
    unique: Optional[Sequence[str]] = None,
) -> Callable[[Type[T]], Type[T]]:
    """Class decorator attaching a TableSchema as __table_schema__"""

    def decorator(host: Type[T]) -> Type[T]:
        schema = TableSchema.from_class(
            host,
            data_source_id=data_source_id,
            name=name,
            snake_case=snake_case,
            primary_key=primary_key,
            unique=unique,
        )
        setattr(host, SCHEMA_ATTRIBUTE, schema)
        return host

    return decorator


def schema_of(host: type) -> Optional[TableSchema]:
    """The TableSchema declared on the class itself, ignoring inherited ones"""
    schema = vars(host).get(SCHEMA_ATTRIBUTE)
    return schema if isinstance(schema, TableSchema) else None


def _collect_columns(host: type) -> List[ColumnSpec]:
    own_annotations = inspect.get_annotations(host)
    hints = typing.get_type_hints(host)
    if dataclasses.is_dataclass(host):
        declared = {field.name: field for field in dataclasses.fields(host)}
    else:
        declared = {}

    columns = []
    for field_name in own_annotations:
        hint = hints.get(field_name, Any)
        if hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar:
            continue
        options = _column_options(declared.get(field_name)) or _column_options(vars(host).get(field_name))
        columns.append(ColumnSpec(name=field_name, python_type=hint, **(options or {})))
    return columns


def _column_options(value: Any) -> Optional[Dict[str, Any]]:
    if isinstance(value, dataclasses.Field):
        return value.metadata.get(COLUMN_METADATA_KEY)
    return None
