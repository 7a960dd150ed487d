"""Data-access interface shared by every entity store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any

from warehouse.models import (
    Address,
    AddressStatus,
    Customer,
    Expedicao,
    Package,
    Street,
    TakeUp,
)


class EntityStore(ABC):
    """CRUD operations per entity type.

    Lists preserve backend order; the assignment matcher depends on it.
    Lookups of unknown ids raise ``NotFoundError``.
    """

    # Customers
    @abstractmethod
    def list_customers(self) -> list[Customer]: ...

    @abstractmethod
    def get_customer(self, customer_id: str) -> Customer: ...

    @abstractmethod
    def create_customer(self, name: str, cnpj: str) -> Customer: ...

    @abstractmethod
    def update_customer(
        self, customer_id: str, name: str | None = None, cnpj: str | None = None
    ) -> Customer: ...

    @abstractmethod
    def delete_customer(self, customer_id: str) -> None: ...

    # Streets
    @abstractmethod
    def list_streets(self) -> list[Street]: ...

    @abstractmethod
    def get_street(self, street_id: int) -> Street: ...

    @abstractmethod
    def create_street(self, name: str) -> Street: ...

    @abstractmethod
    def update_street(self, street_id: int, name: str) -> Street: ...

    @abstractmethod
    def delete_street(self, street_id: int) -> None: ...

    # Addresses
    @abstractmethod
    def list_addresses(self) -> list[Address]: ...

    @abstractmethod
    def get_address(self, address_id: str) -> Address: ...

    @abstractmethod
    def create_address(
        self, street_id: int, number: str, complement: str, status: AddressStatus
    ) -> Address: ...

    @abstractmethod
    def update_address(
        self,
        address_id: str,
        street_id: int,
        number: str,
        complement: str,
        status: AddressStatus,
    ) -> Address: ...

    @abstractmethod
    def delete_address(self, address_id: str) -> None: ...

    @abstractmethod
    def set_address_status(
        self,
        address_id: str,
        status: AddressStatus,
        expected: AddressStatus | None = None,
    ) -> Address:
        """Flip an address status.

        When ``expected`` is given the update only happens if the current
        status matches; otherwise ``InvalidEntityStateError`` is raised.
        """

    # Packages
    @abstractmethod
    def list_packages(self) -> list[Package]: ...

    @abstractmethod
    def list_take_up_packages(self, take_up_id: str) -> list[Package]: ...

    @abstractmethod
    def get_package(self, package_id: str) -> Package: ...

    @abstractmethod
    def create_package(
        self, package_number: str, lot: str, weight: Decimal, take_up_id: str
    ) -> Package: ...

    @abstractmethod
    def update_package(
        self, package_id: str, package_number: str, lot: str, weight: Decimal
    ) -> Package: ...

    @abstractmethod
    def delete_package(self, package_id: str) -> None: ...

    # Take-ups
    @abstractmethod
    def list_take_ups(self) -> list[TakeUp]: ...

    @abstractmethod
    def get_take_up(self, take_up_id: str) -> TakeUp: ...

    @abstractmethod
    def create_take_up(self, customer_id: str) -> TakeUp: ...

    @abstractmethod
    def update_take_up(self, take_up_id: str, customer_id: str) -> TakeUp: ...

    @abstractmethod
    def delete_take_up(self, take_up_id: str) -> None:
        """Delete a take-up and, by cascade, its packages."""

    # Expedicoes
    @abstractmethod
    def list_expedicoes(self) -> list[Expedicao]: ...

    @abstractmethod
    def get_expedicao(self, expedicao_id: str) -> Expedicao: ...

    @abstractmethod
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
    ) -> Expedicao: ...

    @abstractmethod
    def update_expedicao(self, expedicao_id: str, changes: dict[str, Any]) -> Expedicao: ...

    @abstractmethod
    def delete_expedicao(self, expedicao_id: str) -> None: ...

    @abstractmethod
    def list_packages_for_shipping(self) -> list[Package]: ...
