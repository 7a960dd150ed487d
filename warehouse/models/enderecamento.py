"""Package-to-address assignment (enderecamento) model."""

from dataclasses import dataclass
from datetime import datetime

from warehouse.models.base import Address
from warehouse.models.take_up import Package


@dataclass
class Enderecamento:
    """Derived pairing of a package with the filled address holding it.

    Not persisted: rebuilt on every read by ``compute_assignments``, so
    ``id`` is only stable while the backend returns the same ordering.
    """

    id: str
    package: Package
    address: Address
    created_at: datetime
    updated_at: datetime
    address_code: str = ""
    street_name: str = ""
    full_address: str = ""
    customer_name: str = ""
    take_up_code: str = ""
