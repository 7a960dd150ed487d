"""Shipment (expedição) actions."""

from __future__ import annotations

import logging
from dataclasses import fields
from datetime import datetime
from typing import Any, Mapping

from warehouse.actions.base import BaseActions, FormState, OperationResult, validate_form
from warehouse.actions.schemas import ExpedicaoForm
from warehouse.core.listing import matches_query
from warehouse.core.stats import ExpedicaoStats, days_in_transit, expedicao_stats, total_weight
from warehouse.core.transitions import (
    check_shipment_transition,
    get_next_status,
    is_overdue,
    status_update_payload,
)
from warehouse.exceptions import ValidationError
from warehouse.models import Expedicao, ExpedicaoStatus, ExpedicaoWithDetails, Package

logger = logging.getLogger(__name__)

PATHS = ("/dashboard/expedicao",)


class ExpedicaoActions(BaseActions):
    def list(self) -> list[ExpedicaoWithDetails]:
        now = self.now()
        return [with_details(e, now) for e in self.store.list_expedicoes()]

    def get(self, expedicao_id: str) -> ExpedicaoWithDetails:
        return with_details(self.store.get_expedicao(expedicao_id), self.now())

    def search(self, query: str) -> list[ExpedicaoWithDetails]:
        return [
            e
            for e in self.list()
            if matches_query(query, e.code, e.destination, e.responsible, e.carrier, e.tracking, e.status)
        ]

    def stats(self) -> ExpedicaoStats:
        return expedicao_stats(self.store.list_expedicoes(), self.now(), self.listing.recent_limit)

    def packages_for_shipping(self) -> list[Package]:
        return self.store.list_packages_for_shipping()

    def create(self, form: Mapping[str, Any]) -> FormState:
        """Create a shipment in ``Preparando``.

        Every package must exist and must not already travel in a
        shipment that has not been delivered.
        """
        try:
            data = validate_form(ExpedicaoForm, form)
            self._check_packages(data.package_ids)
            expedicao = self.store.create_expedicao(
                code=data.code,
                destination=data.destination,
                responsible=data.responsible,
                carrier=data.carrier,
                tracking=data.tracking,
                package_ids=data.package_ids,
                expected_delivery=data.expected_delivery,
                notes=data.notes,
            )
        except ValidationError as exc:
            return FormState.from_error(exc)

        logger.info("Created expedicao %s with %d packages", expedicao.code, len(data.package_ids))
        self.invalidator.revalidate(*PATHS)
        return FormState(message="Expedição criada com sucesso.")

    def advance_status(self, expedicao_id: str, notes: str | None = None) -> OperationResult:
        """Move a shipment one step along the flow."""
        current = self.store.get_expedicao(expedicao_id)

        next_status = get_next_status(current.status)
        if next_status is None:
            return OperationResult(False, "Expedição já foi entregue")
        return self._apply_status(current, next_status, notes)

    def update_status(
        self, expedicao_id: str, new_status: ExpedicaoStatus | str, notes: str | None = None
    ) -> OperationResult:
        try:
            status = ExpedicaoStatus(new_status)
        except ValueError:
            return OperationResult(False, "Status inválido")

        current = self.store.get_expedicao(expedicao_id)
        return self._apply_status(current, status, notes)

    def delete(self, expedicao_id: str) -> OperationResult:
        self.store.delete_expedicao(expedicao_id)

        self.invalidator.revalidate(*PATHS)
        return OperationResult(True, "Expedição excluída com sucesso.")

    def _apply_status(
        self, current: Expedicao, new_status: ExpedicaoStatus, notes: str | None
    ) -> OperationResult:
        try:
            check_shipment_transition(current.status, new_status)
            changes = status_update_payload(new_status, notes, self.now())
            self.store.update_expedicao(current.id, changes)
        except ValidationError as exc:
            return OperationResult(False, str(exc))

        logger.info(
            "Expedicao %s: %s -> %s",
            current.code,
            current.status.value,
            new_status.value,
            extra={"expedicao_id": current.id, "status": new_status.value},
        )
        self.invalidator.revalidate(*PATHS)
        return OperationResult(True, f'Status da expedição atualizado para "{new_status.value}" com sucesso.')

    def _check_packages(self, package_ids: list[str]) -> None:
        known = {p.id for p in self.store.list_packages()}
        if any(pid not in known for pid in package_ids):
            raise ValidationError("packageIds", "Pacote não encontrado")

        in_open_shipment = {
            p.id
            for e in self.store.list_expedicoes()
            if e.status != ExpedicaoStatus.ENTREGUE
            for p in e.packages
        }
        if any(pid in in_open_shipment for pid in package_ids):
            raise ValidationError("packageIds", "Pacote já está em uma expedição em andamento")


def with_details(expedicao: Expedicao, now: datetime) -> ExpedicaoWithDetails:
    """Attach the display-only fields derived at read time."""
    values = {f.name: getattr(expedicao, f.name) for f in fields(Expedicao)}
    return ExpedicaoWithDetails(
        **values,
        days_in_transit=days_in_transit(expedicao, now),
        is_overdue=is_overdue(expedicao, now),
        next_status=get_next_status(expedicao.status),
        package_count=len(expedicao.packages),
        total_weight=float(total_weight(expedicao.packages)),
    )
