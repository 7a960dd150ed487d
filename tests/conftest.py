"""Pytest configuration and fixtures."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

import pytest

from warehouse.actions import CacheInvalidator
from warehouse.models import (
    Address,
    AddressStatus,
    Customer,
    Package,
    StreetRef,
)
from warehouse.store import InMemoryEntityStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fixed_now() -> datetime:
    """Reference 'now' shared by stores and actions."""
    return datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(fixed_now: datetime) -> InMemoryEntityStore:
    """Create a fresh store for each test."""
    return InMemoryEntityStore(clock=lambda: fixed_now)


@pytest.fixture
def invalidator() -> CacheInvalidator:
    return CacheInvalidator()


@pytest.fixture
def street_ref() -> StreetRef:
    return StreetRef(id=1, name="Rua A")


@pytest.fixture
def make_address(street_ref: StreetRef) -> Callable[..., Address]:
    """Build detached addresses, on "Rua A" unless a street is given."""

    def _make(
        address_id: str, status: AddressStatus, street: StreetRef | None = None, number: str = "1"
    ) -> Address:
        return Address(id=address_id, street=street or street_ref, number=number, status=status)

    return _make


@pytest.fixture
def make_package() -> Callable[..., Package]:
    """Build detached packages; weight is given as text."""

    def _make(package_id: str, weight: str = "1.00", take_up_id: str = "tu-00000001") -> Package:
        return Package(
            id=package_id,
            package_number=f"PKG-{package_id}",
            lot="L1",
            weight=Decimal(weight),
            take_up_id=take_up_id,
        )

    return _make


@dataclass
class Warehouse:
    """Ids of a small warehouse: one street, two addresses, two packages."""

    store: InMemoryEntityStore
    customer: Customer
    take_up_id: str
    street_id: int
    a1: str
    a2: str
    p1: str
    p2: str


@pytest.fixture
def warehouse(store: InMemoryEntityStore) -> Warehouse:
    """A1 filled, A2 empty; packages P1 and P2 in one take-up."""
    customer = store.create_customer("Acme Logística", "12.345.678/0001-95")
    take_up = store.create_take_up(customer.id)
    street = store.create_street("Rua A")
    a1 = store.create_address(street.id, "1", "", AddressStatus.FILLED)
    a2 = store.create_address(street.id, "2", "Nível 1", AddressStatus.EMPTY)
    p1 = store.create_package("PKG-000001", "L1", Decimal("10.005"), take_up.id)
    p2 = store.create_package("PKG-000002", "L1", Decimal("5.00"), take_up.id)
    return Warehouse(
        store=store,
        customer=customer,
        take_up_id=take_up.id,
        street_id=street.id,
        a1=a1.id,
        a2=a2.id,
        p1=p1.id,
        p2=p2.id,
    )
