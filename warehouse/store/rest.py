"""Entity store backed by the warehouse REST API."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, TypeVar

from warehouse.api.client import BackendClient
from warehouse.api.serialization import to_payload
from warehouse.api.transform import (
    decode_address,
    decode_customer,
    decode_expedicao,
    decode_package,
    decode_street,
    decode_take_up,
)
from warehouse.exceptions import InvalidEntityStateError
from warehouse.models import (
    Address,
    AddressStatus,
    Customer,
    Expedicao,
    ExpedicaoStatus,
    Package,
    Street,
    TakeUp,
)
from warehouse.store.base import EntityStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

CUSTOMERS = "/customers"
STREETS = "/streets"
ADDRESSES = "/addresses"
PACKAGES = "/take-ups/packages"
TAKE_UPS = "/take-ups"
EXPEDICOES = "/expedicoes"
PACKAGES_FOR_SHIPPING = "/packages/available-for-shipping"


class RestEntityStore(EntityStore):
    """Map ``EntityStore`` calls onto backend endpoints.

    Parameters
    ----------
    client : BackendClient
        Configured HTTP client.
    """

    def __init__(self, client: BackendClient) -> None:
        self.client = client

    # Customers
    def list_customers(self) -> list[Customer]:
        return self._list(CUSTOMERS, decode_customer)

    def get_customer(self, customer_id: str) -> Customer:
        return decode_customer(self.client.fetch_one(CUSTOMERS, customer_id))

    def create_customer(self, name: str, cnpj: str) -> Customer:
        data = self.client.post(CUSTOMERS, {"name": name, "cnpj": cnpj})
        return decode_customer(data)

    def update_customer(
        self, customer_id: str, name: str | None = None, cnpj: str | None = None
    ) -> Customer:
        payload = to_payload({"name": name, "cnpj": cnpj})
        data = self.client.put(f"{CUSTOMERS}/{customer_id}", payload)
        return self._decode_or_fetch(data, decode_customer, lambda: self.get_customer(customer_id))

    def delete_customer(self, customer_id: str) -> None:
        self.client.delete(f"{CUSTOMERS}/{customer_id}")

    # Streets
    def list_streets(self) -> list[Street]:
        return self._list(STREETS, decode_street)

    def get_street(self, street_id: int) -> Street:
        return decode_street(self.client.fetch_one(STREETS, street_id))

    def create_street(self, name: str) -> Street:
        return decode_street(self.client.post(STREETS, {"name": name}))

    def update_street(self, street_id: int, name: str) -> Street:
        data = self.client.put(f"{STREETS}/{street_id}", {"name": name})
        return self._decode_or_fetch(data, decode_street, lambda: self.get_street(street_id))

    def delete_street(self, street_id: int) -> None:
        self.client.delete(f"{STREETS}/{street_id}")

    # Addresses
    def list_addresses(self) -> list[Address]:
        return self._list(ADDRESSES, decode_address)

    def get_address(self, address_id: str) -> Address:
        return decode_address(self.client.fetch_one(ADDRESSES, address_id))

    def create_address(
        self, street_id: int, number: str, complement: str, status: AddressStatus
    ) -> Address:
        payload = _address_payload(street_id, number, complement, status)
        return decode_address(self.client.post(ADDRESSES, payload))

    def update_address(
        self,
        address_id: str,
        street_id: int,
        number: str,
        complement: str,
        status: AddressStatus,
    ) -> Address:
        payload = _address_payload(street_id, number, complement, status)
        data = self.client.put(f"{ADDRESSES}/{address_id}", payload)
        return self._decode_or_fetch(data, decode_address, lambda: self.get_address(address_id))

    def delete_address(self, address_id: str) -> None:
        self.client.delete(f"{ADDRESSES}/{address_id}")

    def set_address_status(
        self,
        address_id: str,
        status: AddressStatus,
        expected: AddressStatus | None = None,
    ) -> Address:
        # Read-check-write over two round trips; the backend offers no
        # conditional update, so a concurrent writer can still slip in.
        current = self.get_address(address_id)
        if expected is not None and current.status != expected:
            raise InvalidEntityStateError(
                f"Address {address_id} is {current.status.value}, expected {AddressStatus(expected).value}"
            )
        return self.update_address(
            address_id,
            street_id=current.street.id,
            number=current.number,
            complement=current.complement,
            status=status,
        )

    # Packages
    def list_packages(self) -> list[Package]:
        return self._list(PACKAGES, decode_package)

    def list_take_up_packages(self, take_up_id: str) -> list[Package]:
        return self._list(f"{TAKE_UPS}/{take_up_id}/packages", decode_package)

    def get_package(self, package_id: str) -> Package:
        return decode_package(self.client.fetch_one(PACKAGES, package_id))

    def create_package(
        self, package_number: str, lot: str, weight: Decimal, take_up_id: str
    ) -> Package:
        payload = to_payload({
            "package_number": package_number,
            "lot": lot,
            "weight": weight,
            "take_up_id": take_up_id,
        })
        return decode_package(self.client.post(PACKAGES, payload))

    def update_package(
        self, package_id: str, package_number: str, lot: str, weight: Decimal
    ) -> Package:
        payload = to_payload({"package_number": package_number, "lot": lot, "weight": weight})
        data = self.client.put(f"{PACKAGES}/{package_id}", payload)
        return self._decode_or_fetch(data, decode_package, lambda: self.get_package(package_id))

    def delete_package(self, package_id: str) -> None:
        self.client.delete(f"{PACKAGES}/{package_id}")

    # Take-ups
    def list_take_ups(self) -> list[TakeUp]:
        return self._list(TAKE_UPS, decode_take_up)

    def get_take_up(self, take_up_id: str) -> TakeUp:
        return decode_take_up(self.client.fetch_one(TAKE_UPS, take_up_id))

    def create_take_up(self, customer_id: str) -> TakeUp:
        return decode_take_up(self.client.post(TAKE_UPS, {"customer_id": customer_id}))

    def update_take_up(self, take_up_id: str, customer_id: str) -> TakeUp:
        data = self.client.put(f"{TAKE_UPS}/{take_up_id}", {"customer_id": customer_id})
        return self._decode_or_fetch(data, decode_take_up, lambda: self.get_take_up(take_up_id))

    def delete_take_up(self, take_up_id: str) -> None:
        self.client.delete(f"{TAKE_UPS}/{take_up_id}")

    # Expedicoes
    def list_expedicoes(self) -> list[Expedicao]:
        return self._list(EXPEDICOES, decode_expedicao)

    def get_expedicao(self, expedicao_id: str) -> Expedicao:
        return decode_expedicao(self.client.fetch_one(EXPEDICOES, expedicao_id))

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
        payload = to_payload({
            "code": code,
            "destination": destination,
            "responsible": responsible,
            "carrier": carrier,
            "tracking": tracking,
            "package_ids": package_ids,
            "expected_delivery": expected_delivery,
            "notes": notes,
            "status": ExpedicaoStatus.PREPARANDO,
        })
        return decode_expedicao(self.client.post(EXPEDICOES, payload))

    def update_expedicao(self, expedicao_id: str, changes: dict[str, Any]) -> Expedicao:
        data = self.client.put(f"{EXPEDICOES}/{expedicao_id}", to_payload(changes))
        return self._decode_or_fetch(data, decode_expedicao, lambda: self.get_expedicao(expedicao_id))

    def delete_expedicao(self, expedicao_id: str) -> None:
        self.client.delete(f"{EXPEDICOES}/{expedicao_id}")

    def list_packages_for_shipping(self) -> list[Package]:
        return self._list(PACKAGES_FOR_SHIPPING, decode_package)

    # Helpers
    def _list(self, endpoint: str, decode: Callable[[dict[str, Any]], T]) -> list[T]:
        records = self.client.fetch_list(endpoint)
        logger.debug("Fetched %d records from %s", len(records), endpoint)
        return [decode(record) for record in records]

    @staticmethod
    def _decode_or_fetch(
        data: Any,
        decode: Callable[[dict[str, Any]], T],
        fetch: Callable[[], T],
    ) -> T:
        # Some endpoints answer updates with an empty body.
        if isinstance(data, dict) and "id" in data:
            return decode(data)
        return fetch()


def _address_payload(
    street_id: int, number: str, complement: str, status: AddressStatus
) -> dict[str, Any]:
    return to_payload({
        "street_id": street_id,
        "number": number,
        "complement": complement,
        "status": AddressStatus(status),
    })
