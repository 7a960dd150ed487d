"""Tests for shipment actions."""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from warehouse.actions import CacheInvalidator, ExpedicaoActions
from warehouse.exceptions import BackendUnavailableError, NotFoundError
from warehouse.models import ExpedicaoStatus


@pytest.fixture
def actions(warehouse, invalidator: CacheInvalidator, fixed_now: datetime) -> ExpedicaoActions:
    return ExpedicaoActions(warehouse.store, invalidator, clock=lambda: fixed_now)


def shipment_form(*package_ids: str, **overrides: object) -> dict:
    form = {
        "code": "EXP-001",
        "destination": "São Paulo - SP",
        "responsible": "Maria Souza",
        "carrier": "Correios",
        "tracking": "BR123456789",
        "packageIds": list(package_ids),
    }
    form.update(overrides)
    return form


@pytest.fixture
def shipment_id(actions: ExpedicaoActions, warehouse) -> str:
    assert actions.create(shipment_form(warehouse.p1)).ok
    return actions.list()[0].id


class TestCreate:
    def test_starts_preparando(
        self, actions: ExpedicaoActions, warehouse, invalidator: CacheInvalidator
    ) -> None:
        state = actions.create(shipment_form(warehouse.p1, notes="  frágil "))

        assert state.message == "Expedição criada com sucesso."
        [expedicao] = actions.list()
        assert expedicao.status == ExpedicaoStatus.PREPARANDO
        assert expedicao.notes == "frágil"
        assert expedicao.package_count == 1
        assert expedicao.total_weight == 10.01
        assert expedicao.next_status == ExpedicaoStatus.EXPEDIDO
        assert invalidator.paths == ["/dashboard/expedicao"]

    def test_bare_package_id_accepted(self, actions: ExpedicaoActions, warehouse) -> None:
        assert actions.create(shipment_form(packageIds=warehouse.p1)).ok

    def test_requires_packages(self, actions: ExpedicaoActions) -> None:
        state = actions.create(shipment_form())

        assert state.errors == {"packageIds": ["Pelo menos um pacote deve ser selecionado"]}

    def test_invalid_package_ids(self, actions: ExpedicaoActions) -> None:
        state = actions.create(shipment_form("abc"))

        assert state.errors == {"packageIds": ["IDs dos pacotes devem ser UUIDs válidos"]}

    def test_unknown_package(self, actions: ExpedicaoActions) -> None:
        state = actions.create(shipment_form("00000000-0000-0000-0000-000000000000"))

        assert state.errors == {"packageIds": ["Pacote não encontrado"]}

    def test_missing_fields(self, actions: ExpedicaoActions, warehouse) -> None:
        state = actions.create({"packageIds": [warehouse.p1]})

        assert state.errors["code"] == ["Código é obrigatório"]
        assert state.errors["carrier"] == ["Transportadora é obrigatória"]
        assert actions.list() == []

    def test_backend_down_propagates(self, actions: ExpedicaoActions, warehouse) -> None:
        with patch.object(warehouse.store, "create_expedicao", side_effect=BackendUnavailableError("down")):
            with pytest.raises(BackendUnavailableError):
                actions.create(shipment_form(warehouse.p1))

    def test_package_in_open_shipment_rejected(
        self, actions: ExpedicaoActions, warehouse, shipment_id: str
    ) -> None:
        state = actions.create(shipment_form(warehouse.p1, code="EXP-002"))

        assert state.errors == {"packageIds": ["Pacote já está em uma expedição em andamento"]}

    def test_shipping_candidates_exclude_open_shipments(
        self, actions: ExpedicaoActions, warehouse
    ) -> None:
        assert [p.id for p in actions.packages_for_shipping()] == [warehouse.p1]

        actions.create(shipment_form(warehouse.p1))

        assert actions.packages_for_shipping() == []


class TestStatusFlow:
    def test_advance_to_delivered(
        self, actions: ExpedicaoActions, shipment_id: str, fixed_now: datetime
    ) -> None:
        messages = [actions.advance_status(shipment_id).message for _ in range(3)]

        assert messages[-1] == 'Status da expedição atualizado para "Entregue" com sucesso.'
        expedicao = actions.get(shipment_id)
        assert expedicao.status == ExpedicaoStatus.ENTREGUE
        assert expedicao.actual_delivery == fixed_now
        assert expedicao.next_status is None

    def test_delivered_cannot_advance(self, actions: ExpedicaoActions, shipment_id: str) -> None:
        for _ in range(3):
            actions.advance_status(shipment_id)

        result = actions.advance_status(shipment_id)

        assert not result.success
        assert result.message == "Expedição já foi entregue"

    def test_skip_ahead_rejected(self, actions: ExpedicaoActions, shipment_id: str) -> None:
        result = actions.update_status(shipment_id, ExpedicaoStatus.ENTREGUE)

        assert not result.success
        assert result.message.startswith("Transição inválida")
        assert actions.get(shipment_id).status == ExpedicaoStatus.PREPARANDO
        assert actions.get(shipment_id).actual_delivery is None

    def test_intermediate_step_keeps_actual_delivery_empty(
        self, actions: ExpedicaoActions, shipment_id: str
    ) -> None:
        result = actions.update_status(shipment_id, "Expedido", notes="Saiu do CD")

        assert result.success
        expedicao = actions.get(shipment_id)
        assert expedicao.notes == "Saiu do CD"
        assert expedicao.actual_delivery is None

    def test_invalid_status_value(self, actions: ExpedicaoActions, shipment_id: str) -> None:
        assert actions.update_status(shipment_id, "Perdido").message == "Status inválido"

    def test_unknown_shipment_propagates(self, actions: ExpedicaoActions) -> None:
        with pytest.raises(NotFoundError):
            actions.advance_status("missing")
        with pytest.raises(NotFoundError):
            actions.update_status("missing", ExpedicaoStatus.EXPEDIDO)

    def test_delivered_package_can_ship_again(
        self, actions: ExpedicaoActions, warehouse, shipment_id: str
    ) -> None:
        for _ in range(3):
            actions.advance_status(shipment_id)

        assert actions.create(shipment_form(warehouse.p1, code="EXP-002")).ok


class TestReadsAndDelete:
    def test_overdue_flag(self, actions: ExpedicaoActions, warehouse, fixed_now: datetime) -> None:
        yesterday = (fixed_now - timedelta(days=1)).isoformat()
        actions.create(shipment_form(warehouse.p1, expectedDelivery=yesterday))

        [expedicao] = actions.list()

        assert expedicao.is_overdue
        assert actions.stats().expeditions_overdue == 1

    def test_stats_counts(self, actions: ExpedicaoActions, shipment_id: str) -> None:
        actions.advance_status(shipment_id)

        stats = actions.stats()

        assert stats.total_expedicoes == 1
        assert stats.expeditions_in_progress == 1
        assert stats.total_packages_shipped == 1
        assert stats.status_breakdown[ExpedicaoStatus.EXPEDIDO] == 1

    def test_search(self, actions: ExpedicaoActions, shipment_id: str) -> None:
        assert len(actions.search("correios")) == 1
        assert len(actions.search("preparando")) == 1
        assert actions.search("jadlog") == []

    def test_delete(self, actions: ExpedicaoActions, shipment_id: str) -> None:
        result = actions.delete(shipment_id)

        assert result.message == "Expedição excluída com sucesso."
        assert actions.list() == []
        with pytest.raises(NotFoundError):
            actions.delete(shipment_id)
