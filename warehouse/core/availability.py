"""Availability calculator: what can still be assigned or shipped."""

from __future__ import annotations

from typing import Iterable

from warehouse.models import (
    Address,
    AddressStatus,
    Enderecamento,
    Expedicao,
    ExpedicaoStatus,
    Package,
)


def available_packages(
    packages: Iterable[Package], assignments: Iterable[Enderecamento]
) -> list[Package]:
    """Packages not paired with any filled address."""
    assigned = {assignment.package.id for assignment in assignments}
    return [package for package in packages if package.id not in assigned]


def available_addresses(addresses: Iterable[Address]) -> list[Address]:
    """Addresses whose status is empty."""
    return [address for address in addresses if address.status == AddressStatus.EMPTY]


def packages_for_shipping(
    assignments: Iterable[Enderecamento], expedicoes: Iterable[Expedicao]
) -> list[Package]:
    """Stored packages not already part of an undelivered shipment."""
    shipping = {
        package.id
        for expedicao in expedicoes
        if expedicao.status != ExpedicaoStatus.ENTREGUE
        for package in expedicao.packages
    }
    return [a.package for a in assignments if a.package.id not in shipping]
