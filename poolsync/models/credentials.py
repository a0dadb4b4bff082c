"""
Database credentials model
"""
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_PORT = 3306


class DatabaseCredentials(BaseModel):
    """Connection parameters of one data source"""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    host: Optional[str] = None
    port: int = DEFAULT_PORT
    database_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("database_name", "databaseName"),
    )
    user: Optional[str] = None
    password: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        # structured documents may carry numeric ids
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("port", mode="before")
    @classmethod
    def _default_port(cls, value: Any) -> Any:
        # 0, null and "" all mean "not set"
        if value in (None, "", 0, "0"):
            return DEFAULT_PORT
        return value
