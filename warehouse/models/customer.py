"""Customer model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Customer:
    """Company that stores goods in the warehouse."""

    id: str
    name: str
    cnpj: str  # XX.XXX.XXX/XXXX-XX
    created_at: datetime | None = None
    updated_at: datetime | None = None
