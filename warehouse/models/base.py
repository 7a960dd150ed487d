"""Warehouse layout models: streets and the address slots along them."""

from dataclasses import dataclass
from datetime import datetime

from warehouse.models.enums import AddressStatus


@dataclass
class Street:
    """Warehouse street (aisle)."""

    id: int
    name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class StreetRef:
    """Street summary embedded in an address."""

    id: int
    name: str


@dataclass
class Address:
    """Storage slot on a street.

    A ``FILLED`` address holds a package, but which package is not
    persisted; see ``warehouse.core.matcher``.
    """

    id: str
    street: StreetRef
    number: str
    complement: str = ""
    status: AddressStatus = AddressStatus.EMPTY
    created_at: datetime | None = None
    updated_at: datetime | None = None
