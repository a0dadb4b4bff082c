from dataclasses import dataclass
from decimal import Decimal

from poolsync.models import column, table
from poolsync.tests.sample_models.accounts import User  # noqa: F401


@table(data_source_id="reporting", unique=["number", "year"])
@dataclass
class Invoice:
    number: str = column(length=32)
    year: int = column()
    total: Decimal = column(default_value=0)
