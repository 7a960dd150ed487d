"""Populate an entity store with generated sample data."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from warehouse.core.transitions import SHIPMENT_FLOW, status_update_payload
from warehouse.generators.entities import (
    AddressGenerator,
    CustomerGenerator,
    ExpedicaoGenerator,
    PackageGenerator,
    StreetGenerator,
    TakeUpGenerator,
)
from warehouse.models import AddressStatus
from warehouse.store.base import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class SeedPlan:
    """How much sample data to create."""

    customers: int = 5
    streets: int = 4
    addresses_per_street: int = 10
    take_ups_per_customer: int = 2
    packages_per_take_up: int = 3
    fill_ratio: float = 0.5
    expedicoes: int = 2
    packages_per_expedicao: int = 2


def seed_store(
    store: EntityStore,
    plan: SeedPlan | None = None,
    seed: int | None = None,
) -> dict[str, int]:
    """Create customers, streets, addresses, take-ups, packages and shipments.

    A share of the addresses (``plan.fill_ratio``) is marked filled, never
    more than there are packages, so every filled address can be paired
    by the matcher. Shipments are built from stored packages and moved a
    random number of steps along the shipment flow.

    Returns
    -------
    dict[str, int]
        Number of entities created, by type.
    """
    plan = plan or SeedPlan()
    customers_gen = CustomerGenerator(seed=seed)
    streets_gen = StreetGenerator(seed=seed)
    addresses_gen = AddressGenerator(seed=seed)
    take_ups_gen = TakeUpGenerator(seed=seed)
    packages_gen = PackageGenerator(seed=seed)
    expedicoes_gen = ExpedicaoGenerator(seed=seed)

    customers = [
        store.create_customer(c.name, c.cnpj) for c in customers_gen.generate_batch(plan.customers)
    ]

    address_ids: list[str] = []
    for generated in streets_gen.generate_batch(plan.streets):
        street = store.create_street(generated.name)
        for address in addresses_gen.generate_for_street(street, plan.addresses_per_street):
            created = store.create_address(street.id, address.number, address.complement, address.status)
            address_ids.append(created.id)

    package_count = 0
    for customer in customers:
        for _ in range(plan.take_ups_per_customer):
            take_up = store.create_take_up(customer.id)
            for package in packages_gen.generate_batch(take_up.id, plan.packages_per_take_up):
                store.create_package(package.package_number, package.lot, package.weight, take_up.id)
                package_count += 1

    to_fill = min(round(len(address_ids) * plan.fill_ratio), package_count)
    for address_id in random.sample(address_ids, to_fill):
        store.set_address_status(address_id, AddressStatus.FILLED, expected=AddressStatus.EMPTY)

    shipped = 0
    for _ in range(plan.expedicoes):
        candidates = store.list_packages_for_shipping()
        if not candidates:
            break
        chosen = candidates[: plan.packages_per_expedicao]
        draft = expedicoes_gen.generate(chosen)
        expedicao = store.create_expedicao(
            code=draft.code,
            destination=draft.destination,
            responsible=draft.responsible,
            carrier=draft.carrier,
            tracking=draft.tracking,
            package_ids=[p.id for p in chosen],
            expected_delivery=draft.expected_delivery,
        )
        for status in SHIPMENT_FLOW[1 : random.randint(1, len(SHIPMENT_FLOW))]:
            store.update_expedicao(expedicao.id, status_update_payload(status))
        shipped += 1

    summary = {
        "customers": len(customers),
        "streets": plan.streets,
        "addresses": len(address_ids),
        "filled_addresses": to_fill,
        "take_ups": len(customers) * plan.take_ups_per_customer,
        "packages": package_count,
        "expedicoes": shipped,
    }
    logger.info("Seeded store: %s", summary)
    return summary
