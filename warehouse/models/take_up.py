"""Take-up (intake batch) and package models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from warehouse.models.customer import Customer


@dataclass
class Package:
    """Package received in a take-up."""

    id: str
    package_number: str
    lot: str
    weight: Decimal  # kg, 0 < weight <= 99999.99
    take_up_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class TakeUp:
    """Intake batch of packages for one customer."""

    id: str
    customer: Customer
    packages: list[Package] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def customer_id(self) -> str:
        return self.customer.id
