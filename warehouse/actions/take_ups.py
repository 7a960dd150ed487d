"""Take-up actions."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from warehouse.actions.base import BaseActions, FormState, OperationResult, validate_form
from warehouse.actions.schemas import TakeUpForm
from warehouse.core.listing import matches_query
from warehouse.core.stats import TakeUpStats, take_up_stats
from warehouse.exceptions import NotFoundError, ValidationError
from warehouse.models import TakeUp

logger = logging.getLogger(__name__)

PATHS = ("/dashboard/take-up", "/dashboard")


class TakeUpActions(BaseActions):
    def list(self) -> list[TakeUp]:
        return self.store.list_take_ups()

    def get(self, take_up_id: str) -> TakeUp:
        return self.store.get_take_up(take_up_id)

    def search(self, query: str) -> list[TakeUp]:
        return [
            t
            for t in self.list()
            if matches_query(query, t.customer.name, t.customer.cnpj, t.id)
        ]

    def by_customer(self, customer_id: str) -> list[TakeUp]:
        return [t for t in self.list() if t.customer_id == customer_id]

    def stats(self) -> TakeUpStats:
        return take_up_stats(self.list(), self.now(), self.listing.recent_limit)

    def create(self, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(TakeUpForm, form)
            self._check_customer(data.customer_id)
            take_up = self.store.create_take_up(data.customer_id)
        except ValidationError as exc:
            return FormState.from_error(exc)

        logger.info("Created take-up %s for customer %s", take_up.id, data.customer_id)
        self.invalidator.revalidate(*PATHS)
        return FormState(message="Take-up criado com sucesso")

    def update(self, take_up_id: str, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(TakeUpForm, form)
            self._check_customer(data.customer_id)
            self.store.update_take_up(take_up_id, data.customer_id)
        except ValidationError as exc:
            return FormState.from_error(exc)

        self.invalidator.revalidate("/dashboard/take-up", f"/dashboard/take-up/{take_up_id}", "/dashboard")
        return FormState(message="Take-up atualizado com sucesso")

    def delete(self, take_up_id: str) -> OperationResult:
        """Delete a take-up together with its packages."""
        self.store.delete_take_up(take_up_id)

        self.invalidator.revalidate(*PATHS, "/dashboard/pacotes")
        return OperationResult(True, "Take-up excluído com sucesso")

    def _check_customer(self, customer_id: str) -> None:
        try:
            self.store.get_customer(customer_id)
        except NotFoundError:
            raise ValidationError("customerId", "Cliente não encontrado") from None
