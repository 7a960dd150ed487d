"""Tests for RestEntityStore against a mocked BackendClient."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from warehouse.api import BackendClient
from warehouse.exceptions import InvalidEntityStateError
from warehouse.models import AddressStatus, ExpedicaoStatus
from warehouse.store import RestEntityStore

ADDRESS = {
    "id": "a-1",
    "street": {"id": 1, "name": "Rua A"},
    "number": "1",
    "complement": "",
    "status": "empty",
}


@pytest.fixture
def client() -> MagicMock:
    return MagicMock(spec=BackendClient)


@pytest.fixture
def rest_store(client: MagicMock) -> RestEntityStore:
    return RestEntityStore(client)


class TestReads:
    def test_list_addresses(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.fetch_list.return_value = [ADDRESS]

        addresses = rest_store.list_addresses()

        client.fetch_list.assert_called_once_with("/addresses")
        assert addresses[0].street.name == "Rua A"

    def test_all_packages_endpoint(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.fetch_list.return_value = []

        rest_store.list_packages()

        client.fetch_list.assert_called_once_with("/take-ups/packages")

    def test_take_up_packages_endpoint(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.fetch_list.return_value = []

        rest_store.list_take_up_packages("t-1")

        client.fetch_list.assert_called_once_with("/take-ups/t-1/packages")

    def test_packages_for_shipping_endpoint(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.fetch_list.return_value = [{"id": "p-1", "weight": 1}]

        packages = rest_store.list_packages_for_shipping()

        client.fetch_list.assert_called_once_with("/packages/available-for-shipping")
        assert packages[0].id == "p-1"


class TestWrites:
    def test_create_package_payload(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.post.return_value = {"id": "p-1", "package_number": "PKG-1", "weight": 2.5, "take_up_id": "t-1"}

        rest_store.create_package("PKG-1", "L1", Decimal("2.50"), "t-1")

        client.post.assert_called_once_with(
            "/take-ups/packages",
            {"package_number": "PKG-1", "lot": "L1", "weight": 2.5, "take_up_id": "t-1"},
        )

    def test_create_expedicao_sends_preparando(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.post.return_value = {"id": "e-1", "status": "Preparando"}

        rest_store.create_expedicao("EXP-1", "x", "y", "z", "t", ["p-1"])

        payload = client.post.call_args.args[1]
        assert payload["status"] == "Preparando"
        assert payload["package_ids"] == ["p-1"]
        assert "notes" not in payload

    def test_update_with_empty_body_refetches(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.put.return_value = {}
        client.fetch_one.return_value = {"id": 3, "name": "Rua C"}

        street = rest_store.update_street(3, "Rua C")

        client.fetch_one.assert_called_once_with("/streets", 3)
        assert street.name == "Rua C"

    def test_update_expedicao_serializes_changes(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.put.return_value = {"id": "e-1", "status": "Expedido"}

        shipment = rest_store.update_expedicao("e-1", {"status": ExpedicaoStatus.EXPEDIDO})

        client.put.assert_called_once_with("/expedicoes/e-1", {"status": "Expedido"})
        assert shipment.status == ExpedicaoStatus.EXPEDIDO


class TestSetAddressStatus:
    def test_puts_full_address(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.fetch_one.return_value = ADDRESS
        client.put.return_value = {**ADDRESS, "status": "filled"}

        updated = rest_store.set_address_status("a-1", AddressStatus.FILLED, expected=AddressStatus.EMPTY)

        client.put.assert_called_once_with(
            "/addresses/a-1",
            {"street_id": 1, "number": "1", "complement": "", "status": "filled"},
        )
        assert updated.status == AddressStatus.FILLED

    def test_expected_mismatch(self, rest_store: RestEntityStore, client: MagicMock) -> None:
        client.fetch_one.return_value = {**ADDRESS, "status": "filled"}

        with pytest.raises(InvalidEntityStateError):
            rest_store.set_address_status("a-1", AddressStatus.FILLED, expected=AddressStatus.EMPTY)

        client.put.assert_not_called()
