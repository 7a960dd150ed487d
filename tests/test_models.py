"""Tests for warehouse domain models."""

from datetime import datetime, timezone
from decimal import Decimal

from warehouse.models import (
    Address,
    AddressStatus,
    Customer,
    Expedicao,
    ExpedicaoStatus,
    ExpedicaoWithDetails,
    Package,
    StreetRef,
    TakeUp,
)


class TestEnums:
    def test_address_status_values(self) -> None:
        assert AddressStatus.EMPTY.value == "empty"
        assert AddressStatus.FILLED.value == "filled"
        assert AddressStatus("filled") is AddressStatus.FILLED

    def test_expedicao_status_values(self) -> None:
        assert [s.value for s in ExpedicaoStatus] == ["Preparando", "Expedido", "Em Trânsito", "Entregue"]

    def test_str_enum_compares_to_string(self) -> None:
        assert ExpedicaoStatus.ENTREGUE == "Entregue"


class TestAddress:
    def test_defaults(self) -> None:
        address = Address(id="a-1", street=StreetRef(id=1, name="Rua A"), number="3")

        assert address.status == AddressStatus.EMPTY
        assert address.complement == ""
        assert address.created_at is None


class TestTakeUp:
    def test_customer_id_property(self) -> None:
        customer = Customer(id="c-1", name="Acme", cnpj="12.345.678/0001-95")
        take_up = TakeUp(id="t-1", customer=customer)

        assert take_up.customer_id == "c-1"
        assert take_up.packages == []

    def test_packages_not_shared_between_instances(self) -> None:
        customer = Customer(id="c-1", name="Acme", cnpj="12.345.678/0001-95")
        first = TakeUp(id="t-1", customer=customer)
        second = TakeUp(id="t-2", customer=customer)
        first.packages.append(
            Package(id="p-1", package_number="PKG-1", lot="L", weight=Decimal("1"), take_up_id="t-1")
        )

        assert second.packages == []


class TestExpedicao:
    def test_with_details_defaults(self) -> None:
        shipment = ExpedicaoWithDetails(
            id="e-1",
            code="EXP-1",
            destination="Campinas/SP",
            responsible="Ana",
            carrier="Correios",
            tracking="AB123456789BR",
            status=ExpedicaoStatus.PREPARANDO,
            created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )

        assert isinstance(shipment, Expedicao)
        assert shipment.days_in_transit == 0
        assert shipment.is_overdue is False
        assert shipment.next_status is None
        assert shipment.actual_delivery is None
