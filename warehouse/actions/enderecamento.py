"""Enderecamento (package-to-address assignment) actions.

Assignments are not stored: creating one fills an address, removing one
empties it, and every read rebuilds the pairings with
``compute_assignments`` from freshly fetched lists.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from warehouse.actions.base import BaseActions, FormState, OperationResult, validate_form
from warehouse.actions.schemas import EnderecamentoForm
from warehouse.core.availability import available_addresses, available_packages
from warehouse.core.listing import matches_query
from warehouse.core.matcher import compute_assignments, find_assignment
from warehouse.core.stats import EnderecamentoStats, enderecamento_stats
from warehouse.core.transitions import check_assignment, check_release
from warehouse.exceptions import InvalidEntityStateError, ValidationError
from warehouse.models import Address, AddressStatus, Enderecamento, Package

logger = logging.getLogger(__name__)

PATHS = ("/dashboard/enderecamento", "/dashboard/addresses", "/dashboard")


class EnderecamentoActions(BaseActions):
    def list(self) -> list[Enderecamento]:
        packages = self.store.list_packages()
        addresses = self.store.list_addresses()
        return self._assignments(packages, addresses)

    def get(self, address_id: str) -> Enderecamento | None:
        """Assignment currently reported for an address, if any."""
        return find_assignment(self.list(), address_id)

    def search(self, query: str) -> list[Enderecamento]:
        return [
            e
            for e in self.list()
            if matches_query(
                query,
                e.package.package_number,
                e.package.lot,
                e.address_code,
                e.street_name,
                e.customer_name,
                e.take_up_code,
            )
        ]

    def stats(self) -> EnderecamentoStats:
        packages = self.store.list_packages()
        addresses = self.store.list_addresses()
        assignments = self._assignments(packages, addresses)
        return enderecamento_stats(packages, addresses, assignments, self.listing.recent_limit)

    def available_packages(self) -> list[Package]:
        packages = self.store.list_packages()
        assignments = self._assignments(packages, self.store.list_addresses())
        return available_packages(packages, assignments)

    def available_addresses(self) -> list[Address]:
        return available_addresses(self.store.list_addresses())

    def create_assignment(self, form: Mapping[str, Any]) -> FormState:
        """Place a package at an empty address.

        The address is checked before the package; the address flip is
        conditional on the address still being empty.
        """
        try:
            data = validate_form(EnderecamentoForm, form)
            address = check_assignment(
                data.address_id,
                data.package_id,
                self.available_packages(),
                self.available_addresses(),
            )
            self._flip(address.id, AddressStatus.FILLED, expected=AddressStatus.EMPTY)
        except ValidationError as exc:
            return FormState.from_error(exc)

        logger.info(
            "Package %s assigned to address %s",
            data.package_id,
            data.address_id,
            extra={"package_id": data.package_id, "address_id": data.address_id},
        )
        self.invalidator.revalidate(*PATHS)
        return FormState(message="Endereçamento criado com sucesso!")

    def remove_assignment(self, address_id: str) -> OperationResult:
        """Free a filled address."""
        try:
            check_release(address_id, self.store.list_addresses())
            self._flip(address_id, AddressStatus.EMPTY, expected=AddressStatus.FILLED)
        except ValidationError as exc:
            return OperationResult(False, str(exc))

        logger.info("Address %s released", address_id, extra={"address_id": address_id})
        self.invalidator.revalidate(*PATHS)
        return OperationResult(True, "Endereçamento removido com sucesso!")

    def _flip(self, address_id: str, status: AddressStatus, expected: AddressStatus) -> None:
        try:
            self.store.set_address_status(address_id, status, expected=expected)
        except InvalidEntityStateError as exc:
            # Someone else changed the address since it was checked.
            logger.warning("Address %s changed concurrently: %s", address_id, exc)
            message = (
                "Endereço não encontrado ou já ocupado"
                if status == AddressStatus.FILLED
                else "Endereço não está ocupado"
            )
            raise ValidationError("addressId", message) from exc

    def _assignments(self, packages: list[Package], addresses: list[Address]) -> list[Enderecamento]:
        names = {t.id: t.customer.name for t in self.store.list_take_ups()}
        return compute_assignments(packages, addresses, customer_names=names, now=self.now())
