"""Customer actions."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from warehouse.actions.base import (
    BaseActions,
    FormState,
    OperationResult,
    is_constraint_violation,
    validate_form,
)
from warehouse.actions.schemas import CustomerForm
from warehouse.core.listing import matches_query
from warehouse.core.stats import CustomerStats, customer_stats
from warehouse.exceptions import ApiError, InvalidEntityStateError, ValidationError
from warehouse.models import Customer

logger = logging.getLogger(__name__)

PATHS = ("/dashboard/clientes", "/dashboard")


class CustomerActions(BaseActions):
    def list(self) -> list[Customer]:
        return self.store.list_customers()

    def get(self, customer_id: str) -> Customer:
        return self.store.get_customer(customer_id)

    def search(self, query: str) -> list[Customer]:
        return [c for c in self.list() if matches_query(query, c.name, c.cnpj)]

    def stats(self) -> CustomerStats:
        return customer_stats(self.list(), self.now(), self.listing.recent_limit)

    def create(self, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(CustomerForm, form)
            self._check_cnpj_free(data.cnpj)
            customer = self.store.create_customer(data.name, data.cnpj)
        except ValidationError as exc:
            return FormState.from_error(exc)

        logger.info("Created customer %s", customer.id)
        self.invalidator.revalidate(*PATHS)
        return FormState(message="Cliente criado com sucesso")

    def update(self, customer_id: str, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(CustomerForm, form)
            self._check_cnpj_free(data.cnpj, exclude=customer_id)
            self.store.update_customer(customer_id, name=data.name, cnpj=data.cnpj)
        except ValidationError as exc:
            return FormState.from_error(exc)

        self.invalidator.revalidate("/dashboard/clientes", f"/dashboard/clientes/{customer_id}", "/dashboard")
        return FormState(message="Cliente atualizado com sucesso")

    def delete(self, customer_id: str) -> OperationResult:
        try:
            self.store.delete_customer(customer_id)
        except (InvalidEntityStateError, ApiError) as exc:
            if not is_constraint_violation(exc):
                raise
            logger.warning("Customer %s not deleted: %s", customer_id, exc)
            return OperationResult(
                False, "Não é possível excluir este cliente pois ele possui take-ups associados"
            )

        self.invalidator.revalidate(*PATHS)
        return OperationResult(True, "Cliente excluído com sucesso")

    def _check_cnpj_free(self, cnpj: str, exclude: str | None = None) -> None:
        for customer in self.store.list_customers():
            if customer.cnpj == cnpj and customer.id != exclude:
                raise ValidationError("cnpj", "CNPJ já está em uso")
