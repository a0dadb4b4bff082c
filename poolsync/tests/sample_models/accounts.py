from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional

from poolsync.models import Timestamp, column, table


@table(data_source_id="main", snake_case=True)
@dataclass
class User:
    userId: int = column(primary_key=True, auto_increment=True)
    email: str = column(unique=True, length=120)
    displayName: Optional[str] = column(nullable=True, default=None)
    cache_hits: int = column(transient=True, default=0)

    kind: ClassVar[str] = "user"


@table(data_source_id="MAIN", name="audit_log", primary_key=["user_id", "created_at"])
@dataclass
class AuditEntry:
    user_id: int
    created_at: datetime = column(default_value="CURRENT_TIMESTAMP")
    updated_at: Timestamp = column(
        default_value="CURRENT_TIMESTAMP",
        on_update="CURRENT_TIMESTAMP",
        default=None,
    )


class NotAModel:
    name: str = "plain"
