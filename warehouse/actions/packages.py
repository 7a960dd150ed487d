"""Package actions."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from warehouse.actions.base import BaseActions, FormState, OperationResult, validate_form
from warehouse.actions.schemas import PackageForm, PackageUpdateForm
from warehouse.core.listing import matches_query
from warehouse.core.stats import PackageStats, package_stats
from warehouse.exceptions import NotFoundError, ValidationError
from warehouse.models import Package

logger = logging.getLogger(__name__)

RECENT_PACKAGES = 10


class PackageActions(BaseActions):
    def list(self) -> list[Package]:
        return self.store.list_packages()

    def by_take_up(self, take_up_id: str) -> list[Package]:
        return self.store.list_take_up_packages(take_up_id)

    def get(self, package_id: str) -> Package:
        return self.store.get_package(package_id)

    def search(self, query: str) -> list[Package]:
        return [p for p in self.list() if matches_query(query, p.package_number, p.lot, p.id)]

    def stats(self) -> PackageStats:
        return package_stats(self.list(), RECENT_PACKAGES)

    def create(self, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(PackageForm, form)
            try:
                self.store.get_take_up(data.take_up_id)
            except NotFoundError:
                raise ValidationError("takeUpId", "Take-up não encontrado") from None
            self._check_number_free(data.take_up_id, data.package_number)
            package = self.store.create_package(data.package_number, data.lot, data.weight, data.take_up_id)
        except ValidationError as exc:
            return FormState.from_error(exc)

        logger.info(
            "Created package %s in take-up %s",
            package.package_number,
            package.take_up_id,
            extra={"package_id": package.id, "take_up_id": package.take_up_id},
        )
        self._revalidate(package.take_up_id)
        return FormState(message="Pacote criado com sucesso")

    def update(self, package_id: str, form: Mapping[str, Any]) -> FormState:
        try:
            data = validate_form(PackageUpdateForm, form)
            current = self.store.get_package(package_id)
            self._check_number_free(current.take_up_id, data.package_number, exclude=package_id)
            self.store.update_package(package_id, data.package_number, data.lot, data.weight)
        except ValidationError as exc:
            return FormState.from_error(exc)

        self._revalidate(current.take_up_id)
        return FormState(message="Pacote atualizado com sucesso")

    def delete(self, package_id: str) -> OperationResult:
        package = self.store.get_package(package_id)
        self.store.delete_package(package_id)

        self._revalidate(package.take_up_id)
        return OperationResult(True, "Pacote excluído com sucesso")

    def _check_number_free(self, take_up_id: str, package_number: str, exclude: str | None = None) -> None:
        for package in self.store.list_take_up_packages(take_up_id):
            if package.package_number == package_number and package.id != exclude:
                raise ValidationError("packageNumber", "Número do pacote já existe neste take-up")

    def _revalidate(self, take_up_id: str) -> None:
        self.invalidator.revalidate(
            "/dashboard/take-up",
            f"/dashboard/take-up/{take_up_id}",
            "/dashboard/pacotes",
            "/dashboard",
        )
