"""In-memory entity store with referential integrity.

Stands in for the REST backend in tests, demos and seeding. Insertion
order is preserved, which is the order the matcher relies on.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

from warehouse.core.availability import packages_for_shipping
from warehouse.core.matcher import compute_assignments
from warehouse.exceptions import (
    InvalidEntityStateError,
    NotFoundError,
    ReferentialIntegrityError,
)
from warehouse.models import (
    Address,
    AddressStatus,
    Customer,
    Expedicao,
    ExpedicaoStatus,
    Package,
    Street,
    StreetRef,
    TakeUp,
)
from warehouse.store.base import EntityStore


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InMemoryEntityStore(EntityStore):
    """In-memory store for warehouse entities with relationship tracking."""

    customers: dict[str, Customer] = field(default_factory=dict)
    streets: dict[int, Street] = field(default_factory=dict)
    addresses: dict[str, Address] = field(default_factory=dict)
    packages: dict[str, Package] = field(default_factory=dict)
    take_ups: dict[str, TakeUp] = field(default_factory=dict)
    expedicoes: dict[str, Expedicao] = field(default_factory=dict)
    clock: Callable[[], datetime] = _utcnow

    # Relationship indexes
    _street_addresses: dict[int, list[str]] = field(default_factory=dict)
    _take_up_packages: dict[str, list[str]] = field(default_factory=dict)
    _customer_take_ups: dict[str, list[str]] = field(default_factory=dict)
    _next_street_id: int = 1

    # Customers
    def list_customers(self) -> list[Customer]:
        return list(self.customers.values())

    def get_customer(self, customer_id: str) -> Customer:
        return self._lookup(self.customers, customer_id, "Customer")

    def create_customer(self, name: str, cnpj: str) -> Customer:
        now = self.clock()
        customer = Customer(id=_new_id(), name=name, cnpj=cnpj, created_at=now, updated_at=now)
        self.customers[customer.id] = customer
        self._customer_take_ups[customer.id] = []
        return customer

    def update_customer(
        self, customer_id: str, name: str | None = None, cnpj: str | None = None
    ) -> Customer:
        current = self.get_customer(customer_id)
        updated = replace(
            current,
            name=name if name is not None else current.name,
            cnpj=cnpj if cnpj is not None else current.cnpj,
            updated_at=self.clock(),
        )
        self.customers[customer_id] = updated
        return updated

    def delete_customer(self, customer_id: str) -> None:
        self.get_customer(customer_id)
        if self._customer_take_ups.get(customer_id):
            raise InvalidEntityStateError(f"Customer {customer_id} still has take-ups")
        del self.customers[customer_id]
        self._customer_take_ups.pop(customer_id, None)

    # Streets
    def list_streets(self) -> list[Street]:
        return list(self.streets.values())

    def get_street(self, street_id: int) -> Street:
        return self._lookup(self.streets, street_id, "Street")

    def create_street(self, name: str) -> Street:
        now = self.clock()
        street = Street(id=self._next_street_id, name=name, created_at=now, updated_at=now)
        self._next_street_id += 1
        self.streets[street.id] = street
        self._street_addresses[street.id] = []
        return street

    def update_street(self, street_id: int, name: str) -> Street:
        updated = replace(self.get_street(street_id), name=name, updated_at=self.clock())
        self.streets[street_id] = updated
        for address_id in self._street_addresses[street_id]:
            address = self.addresses[address_id]
            self.addresses[address_id] = replace(address, street=StreetRef(id=street_id, name=name))
        return updated

    def delete_street(self, street_id: int) -> None:
        self.get_street(street_id)
        if self._street_addresses.get(street_id):
            raise InvalidEntityStateError(f"Street {street_id} still has addresses")
        del self.streets[street_id]
        self._street_addresses.pop(street_id, None)

    # Addresses
    def list_addresses(self) -> list[Address]:
        return list(self.addresses.values())

    def get_address(self, address_id: str) -> Address:
        return self._lookup(self.addresses, address_id, "Address")

    def create_address(
        self, street_id: int, number: str, complement: str, status: AddressStatus
    ) -> Address:
        street = self._require_street(street_id)
        now = self.clock()
        address = Address(
            id=_new_id(),
            street=StreetRef(id=street.id, name=street.name),
            number=number,
            complement=complement,
            status=AddressStatus(status),
            created_at=now,
            updated_at=now,
        )
        self.addresses[address.id] = address
        self._street_addresses[street.id].append(address.id)
        return address

    def update_address(
        self,
        address_id: str,
        street_id: int,
        number: str,
        complement: str,
        status: AddressStatus,
    ) -> Address:
        current = self.get_address(address_id)
        street = self._require_street(street_id)
        if current.street.id != street.id:
            self._street_addresses[current.street.id].remove(address_id)
            self._street_addresses[street.id].append(address_id)
        updated = replace(
            current,
            street=StreetRef(id=street.id, name=street.name),
            number=number,
            complement=complement,
            status=AddressStatus(status),
            updated_at=self.clock(),
        )
        self.addresses[address_id] = updated
        return updated

    def delete_address(self, address_id: str) -> None:
        address = self.get_address(address_id)
        del self.addresses[address_id]
        self._street_addresses[address.street.id].remove(address_id)

    def set_address_status(
        self,
        address_id: str,
        status: AddressStatus,
        expected: AddressStatus | None = None,
    ) -> Address:
        current = self.get_address(address_id)
        if expected is not None and current.status != expected:
            raise InvalidEntityStateError(
                f"Address {address_id} is {current.status.value}, expected {AddressStatus(expected).value}"
            )
        updated = replace(current, status=AddressStatus(status), updated_at=self.clock())
        self.addresses[address_id] = updated
        return updated

    # Packages
    def list_packages(self) -> list[Package]:
        return list(self.packages.values())

    def list_take_up_packages(self, take_up_id: str) -> list[Package]:
        self.get_take_up(take_up_id)
        return [self.packages[pid] for pid in self._take_up_packages.get(take_up_id, [])]

    def get_package(self, package_id: str) -> Package:
        return self._lookup(self.packages, package_id, "Package")

    def create_package(
        self, package_number: str, lot: str, weight: Decimal, take_up_id: str
    ) -> Package:
        if take_up_id not in self.take_ups:
            raise ReferentialIntegrityError(f"TakeUp {take_up_id} not found")
        now = self.clock()
        package = Package(
            id=_new_id(),
            package_number=package_number,
            lot=lot,
            weight=Decimal(weight),
            take_up_id=take_up_id,
            created_at=now,
            updated_at=now,
        )
        self.packages[package.id] = package
        self._take_up_packages[take_up_id].append(package.id)
        return package

    def update_package(
        self, package_id: str, package_number: str, lot: str, weight: Decimal
    ) -> Package:
        updated = replace(
            self.get_package(package_id),
            package_number=package_number,
            lot=lot,
            weight=Decimal(weight),
            updated_at=self.clock(),
        )
        self.packages[package_id] = updated
        return updated

    def delete_package(self, package_id: str) -> None:
        package = self.get_package(package_id)
        del self.packages[package_id]
        self._take_up_packages[package.take_up_id].remove(package_id)

    # Take-ups
    def list_take_ups(self) -> list[TakeUp]:
        return [self._hydrate(take_up) for take_up in self.take_ups.values()]

    def get_take_up(self, take_up_id: str) -> TakeUp:
        return self._hydrate(self._lookup(self.take_ups, take_up_id, "TakeUp"))

    def create_take_up(self, customer_id: str) -> TakeUp:
        customer = self._require_customer(customer_id)
        now = self.clock()
        take_up = TakeUp(id=_new_id(), customer=customer, created_at=now, updated_at=now)
        self.take_ups[take_up.id] = take_up
        self._take_up_packages[take_up.id] = []
        self._customer_take_ups[customer.id].append(take_up.id)
        return self._hydrate(take_up)

    def update_take_up(self, take_up_id: str, customer_id: str) -> TakeUp:
        current = self._lookup(self.take_ups, take_up_id, "TakeUp")
        customer = self._require_customer(customer_id)
        if current.customer.id != customer.id:
            self._customer_take_ups[current.customer.id].remove(take_up_id)
            self._customer_take_ups[customer.id].append(take_up_id)
        updated = replace(current, customer=customer, updated_at=self.clock())
        self.take_ups[take_up_id] = updated
        return self._hydrate(updated)

    def delete_take_up(self, take_up_id: str) -> None:
        take_up = self._lookup(self.take_ups, take_up_id, "TakeUp")
        for package_id in self._take_up_packages.pop(take_up_id, []):
            del self.packages[package_id]
        del self.take_ups[take_up_id]
        self._customer_take_ups[take_up.customer.id].remove(take_up_id)

    # Expedicoes
    def list_expedicoes(self) -> list[Expedicao]:
        return list(self.expedicoes.values())

    def get_expedicao(self, expedicao_id: str) -> Expedicao:
        return self._lookup(self.expedicoes, expedicao_id, "Expedicao")

    def create_expedicao(
        self,
        code: str,
        destination: str,
        responsible: str,
        carrier: str,
        tracking: str,
        package_ids: list[str],
        expected_delivery: datetime | None = None,
        notes: str | None = None,
    ) -> Expedicao:
        missing = [pid for pid in package_ids if pid not in self.packages]
        if missing:
            raise ReferentialIntegrityError(f"Package {missing[0]} not found")
        now = self.clock()
        expedicao = Expedicao(
            id=_new_id(),
            code=code,
            destination=destination,
            responsible=responsible,
            carrier=carrier,
            tracking=tracking,
            status=ExpedicaoStatus.PREPARANDO,
            packages=[self.packages[pid] for pid in package_ids],
            created_at=now,
            updated_at=now,
            expected_delivery=expected_delivery,
            notes=notes,
        )
        self.expedicoes[expedicao.id] = expedicao
        return expedicao

    def update_expedicao(self, expedicao_id: str, changes: dict[str, Any]) -> Expedicao:
        current = self.get_expedicao(expedicao_id)
        values = {k: v for k, v in changes.items() if k != "updated_at"}
        if "status" in values:
            values["status"] = ExpedicaoStatus(values["status"])
        updated = replace(current, **values, updated_at=self.clock())
        self.expedicoes[expedicao_id] = updated
        return updated

    def delete_expedicao(self, expedicao_id: str) -> None:
        self.get_expedicao(expedicao_id)
        del self.expedicoes[expedicao_id]

    def list_packages_for_shipping(self) -> list[Package]:
        assignments = compute_assignments(self.list_packages(), self.list_addresses())
        return packages_for_shipping(assignments, self.list_expedicoes())

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "customers": len(self.customers),
            "streets": len(self.streets),
            "addresses": len(self.addresses),
            "packages": len(self.packages),
            "take_ups": len(self.take_ups),
            "expedicoes": len(self.expedicoes),
        }

    # Helpers
    @staticmethod
    def _lookup(table: dict, key: Any, entity: str) -> Any:
        try:
            return table[key]
        except KeyError:
            raise NotFoundError(f"{entity} {key} not found") from None

    def _require_street(self, street_id: int) -> Street:
        if street_id not in self.streets:
            raise ReferentialIntegrityError(f"Street {street_id} not found")
        return self.streets[street_id]

    def _require_customer(self, customer_id: str) -> Customer:
        if customer_id not in self.customers:
            raise ReferentialIntegrityError(f"Customer {customer_id} not found")
        return self.customers[customer_id]

    def _hydrate(self, take_up: TakeUp) -> TakeUp:
        return replace(
            take_up,
            customer=self.customers.get(take_up.customer.id, take_up.customer),
            packages=[self.packages[pid] for pid in self._take_up_packages.get(take_up.id, [])],
        )


def _new_id() -> str:
    return str(uuid.uuid4())
