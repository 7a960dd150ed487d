"""Tests for sample data generators and store seeding."""

import re
from decimal import Decimal

import pytest

from warehouse.core import compute_assignments
from warehouse.generators import (
    AddressGenerator,
    CustomerGenerator,
    ExpedicaoGenerator,
    PackageGenerator,
    SeedPlan,
    StreetGenerator,
    TakeUpGenerator,
    format_cnpj,
    is_valid_cnpj,
    seed_store,
    street_letters,
)
from warehouse.models import AddressStatus, ExpedicaoStatus
from warehouse.store import InMemoryEntityStore


class TestCnpj:
    def test_known_valid(self) -> None:
        assert is_valid_cnpj("11.222.333/0001-81")
        assert is_valid_cnpj("11222333000181")

    def test_wrong_check_digit(self) -> None:
        assert not is_valid_cnpj("11.222.333/0001-82")

    def test_repeated_digits_rejected(self) -> None:
        assert not is_valid_cnpj("00.000.000/0000-00")

    def test_format(self) -> None:
        assert format_cnpj("12345678000195") == "12.345.678/0001-95"


class TestCustomerGenerator:
    def test_generate_customer(self, seed: int) -> None:
        customer = CustomerGenerator(seed=seed).generate()

        assert customer.name
        assert re.fullmatch(r"\d{2}\.\d{3}\.\d{3}/0001-\d{2}", customer.cnpj)
        assert is_valid_cnpj(customer.cnpj)

    def test_generate_multiple(self, seed: int) -> None:
        customers = list(CustomerGenerator(seed=seed).generate_batch(5))

        assert len({c.id for c in customers}) == 5

    def test_reproducible(self, seed: int) -> None:
        first = CustomerGenerator(seed=seed).generate()
        second = CustomerGenerator(seed=seed).generate()

        assert (first.name, first.cnpj) == (second.name, second.cnpj)


class TestStreetsAndAddresses:
    @pytest.mark.parametrize(("index", "letters"), [(0, "A"), (25, "Z"), (26, "AA"), (27, "AB"), (701, "ZZ")])
    def test_street_letters(self, index: int, letters: str) -> None:
        assert street_letters(index) == letters

    def test_street_names(self, seed: int) -> None:
        streets = list(StreetGenerator(seed=seed).generate_batch(3, start=1))

        assert [s.name for s in streets] == ["Rua B", "Rua C", "Rua D"]

    def test_addresses_numbered_and_empty(self, seed: int) -> None:
        [street] = StreetGenerator(seed=seed).generate_batch(1)

        addresses = list(AddressGenerator(seed=seed).generate_for_street(street, 4))

        assert [a.number for a in addresses] == ["1", "2", "3", "4"]
        assert all(a.status == AddressStatus.EMPTY for a in addresses)
        assert all(a.street.name == "Rua A" for a in addresses)


class TestPackagesAndShipments:
    def test_package_format(self, seed: int) -> None:
        package = PackageGenerator(seed=seed).generate("tu-1")

        assert re.fullmatch(r"PKG-\d{6}", package.package_number)
        assert Decimal("0.5") <= package.weight <= Decimal("500")
        assert package.weight == package.weight.quantize(Decimal("0.01"))
        assert package.take_up_id == "tu-1"

    def test_batch_numbers_unique(self, seed: int) -> None:
        packages = PackageGenerator(seed=seed).generate_batch("tu-1", 50)

        assert len({p.package_number for p in packages}) == 50

    def test_take_up_belongs_to_customer(self, seed: int) -> None:
        customer = CustomerGenerator(seed=seed).generate()

        take_up = TakeUpGenerator(seed=seed).generate(customer)

        assert take_up.customer_id == customer.id

    def test_shipment_draft(self, seed: int) -> None:
        packages = PackageGenerator(seed=seed).generate_batch("tu-1", 2)

        expedicao = ExpedicaoGenerator(seed=seed).generate(packages)

        assert expedicao.status == ExpedicaoStatus.PREPARANDO
        assert expedicao.carrier in ExpedicaoGenerator.CARRIERS
        assert expedicao.expected_delivery > expedicao.created_at
        assert len(expedicao.packages) == 2


class TestSeedStore:
    def test_counts(self, store: InMemoryEntityStore, seed: int) -> None:
        plan = SeedPlan(customers=2, streets=2, addresses_per_street=5, expedicoes=1)

        summary = seed_store(store, plan, seed=seed)

        assert summary["addresses"] == 10
        assert summary["filled_addresses"] == 5
        assert summary["packages"] == 12
        assert store.summary()["packages"] == 12
        assert summary["expedicoes"] == 1

    def test_every_filled_address_is_paired(self, store: InMemoryEntityStore, seed: int) -> None:
        seed_store(store, SeedPlan(fill_ratio=0.9, customers=1, take_ups_per_customer=1), seed=seed)

        filled = [a for a in store.list_addresses() if a.status == AddressStatus.FILLED]
        assignments = compute_assignments(store.list_packages(), store.list_addresses())

        assert len(filled) == 3
        assert len(assignments) == len(filled)

    def test_shipments_follow_the_flow(self, store: InMemoryEntityStore, seed: int) -> None:
        seed_store(store, SeedPlan(expedicoes=3), seed=seed)

        for expedicao in store.list_expedicoes():
            delivered = expedicao.status == ExpedicaoStatus.ENTREGUE
            assert (expedicao.actual_delivery is not None) == delivered
