"""Street actions."""

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
from warehouse.actions.schemas import StreetForm
from warehouse.core.listing import matches_query
from warehouse.core.stats import StreetStats, street_stats
from warehouse.exceptions import ApiError, InvalidEntityStateError, ValidationError
from warehouse.models import Street

logger = logging.getLogger(__name__)

PATHS = ("/dashboard/rua", "/dashboard")


class StreetActions(BaseActions):
    def list(self) -> list[Street]:
        return self.store.list_streets()

    def get(self, street_id: int) -> Street:
        return self.store.get_street(street_id)

    def search(self, query: str) -> list[Street]:
        return [s for s in self.list() if matches_query(query, s.name)]

    def stats(self) -> StreetStats:
        return street_stats(self.list(), self.listing.recent_limit)

    def create(self, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(StreetForm, form)
            self._check_name_free(data.name)
            self.store.create_street(data.name)
        except ValidationError as exc:
            return FormState.from_error(exc)

        self.invalidator.revalidate(*PATHS)
        return FormState(message="Rua criada com sucesso")

    def update(self, street_id: int, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(StreetForm, form)
            self._check_name_free(data.name, exclude=street_id)
            self.store.update_street(street_id, data.name)
        except ValidationError as exc:
            return FormState.from_error(exc)

        self.invalidator.revalidate("/dashboard/rua", f"/dashboard/rua/{street_id}", "/dashboard")
        return FormState(message="Rua atualizada com sucesso")

    def delete(self, street_id: int) -> OperationResult:
        try:
            self.store.delete_street(street_id)
        except (InvalidEntityStateError, ApiError) as exc:
            if not is_constraint_violation(exc):
                raise
            logger.warning("Street %s not deleted: %s", street_id, exc)
            return OperationResult(
                False, "Não é possível excluir esta rua pois ela possui endereços associados"
            )

        self.invalidator.revalidate(*PATHS)
        return OperationResult(True, "Rua excluída com sucesso")

    def _check_name_free(self, name: str, exclude: int | None = None) -> None:
        for street in self.store.list_streets():
            if street.name.lower() == name.lower() and street.id != exclude:
                raise ValidationError("name", "Nome da rua já está em uso")
