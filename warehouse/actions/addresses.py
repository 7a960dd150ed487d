"""Address actions."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from warehouse.actions.base import BaseActions, FormState, OperationResult, validate_form
from warehouse.actions.schemas import AddressForm
from warehouse.core.listing import matches_query
from warehouse.core.stats import AddressSummary, address_summary
from warehouse.exceptions import NotFoundError, ValidationError
from warehouse.models import Address

logger = logging.getLogger(__name__)

PATHS = ("/dashboard/enderecos",)


class AddressActions(BaseActions):
    def list(self) -> list[Address]:
        return self.store.list_addresses()

    def get(self, address_id: str) -> Address:
        return self.store.get_address(address_id)

    def search(self, query: str) -> list[Address]:
        return [
            a
            for a in self.list()
            if matches_query(query, a.number, a.complement, a.street.name, a.id)
        ]

    def by_street(self, street_id: int) -> list[Address]:
        return [a for a in self.list() if a.street.id == street_id]

    def summary(self) -> AddressSummary:
        return address_summary(self.list(), self.listing.recent_limit)

    def create(self, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(AddressForm, form)
            self._check_street(data.street_id)
            address = self.store.create_address(data.street_id, data.number, data.complement, data.status)
        except ValidationError as exc:
            return FormState.from_error(exc)

        logger.info("Created address %s on street %s", address.id, data.street_id)
        self.invalidator.revalidate(*PATHS)
        return FormState(message="Endereço criado com sucesso!")

    def update(self, address_id: str, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(AddressForm, form)
            self._check_street(data.street_id)
            self.store.update_address(address_id, data.street_id, data.number, data.complement, data.status)
        except ValidationError as exc:
            return FormState.from_error(exc)

        self.invalidator.revalidate("/dashboard/enderecos", f"/dashboard/enderecos/{address_id}")
        return FormState(message="Endereço atualizado com sucesso!")

    def delete(self, address_id: str) -> OperationResult:
        self.store.delete_address(address_id)

        self.invalidator.revalidate(*PATHS)
        return OperationResult(True, "Endereço excluído com sucesso!")

    def _check_street(self, street_id: int) -> None:
        try:
            self.store.get_street(street_id)
        except NotFoundError:
            raise ValidationError("streetId", "Rua selecionada não existe") from None
