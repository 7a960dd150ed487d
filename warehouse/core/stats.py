"""Statistics aggregator for the dashboard.

Pure functions over freshly fetched lists. Money-like values (weights)
use ``Decimal`` rounded half-up to two places.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from warehouse.core.transitions import is_overdue
from warehouse.models import (
    Address,
    AddressStatus,
    Customer,
    Enderecamento,
    Expedicao,
    ExpedicaoStatus,
    Package,
    Street,
    TakeUp,
)

TWO_PLACES = Decimal("0.01")


@dataclass
class EnderecamentoStats:
    total_enderecamentos: int
    total_packages_assigned: int
    total_packages_unassigned: int
    warehouse_occupancy_percentage: int
    addresses_occupied: int
    addresses_available: int
    total_addresses: int
    recent_enderecamentos: list[Enderecamento] = field(default_factory=list)


@dataclass
class StreetOccupancy:
    street_id: int
    street_name: str
    total_addresses: int = 0
    empty_addresses: int = 0
    filled_addresses: int = 0


@dataclass
class AddressSummary:
    total_addresses: int
    empty_addresses: int
    filled_addresses: int
    addresses_by_street: list[StreetOccupancy] = field(default_factory=list)
    recent_addresses: list[Address] = field(default_factory=list)


@dataclass
class PackageStats:
    total_packages: int
    total_weight: Decimal
    avg_weight: Decimal
    recent_packages: list[Package] = field(default_factory=list)


@dataclass
class TakeUpStats:
    total_take_ups: int
    total_packages: int
    new_take_ups_this_month: int
    avg_packages_per_take_up: Decimal
    recent_take_ups: list[TakeUp] = field(default_factory=list)


@dataclass
class CustomerStats:
    total_customers: int
    new_customers_this_month: int
    recent_customers: list[Customer] = field(default_factory=list)


@dataclass
class StreetStats:
    total_streets: int
    recent_streets: list[Street] = field(default_factory=list)


@dataclass
class ExpedicaoStats:
    total_expedicoes: int
    total_packages_shipped: int
    expeditions_in_progress: int
    expeditions_delivered: int
    expeditions_overdue: int
    average_transit_days: Decimal
    total_weight_shipped: Decimal
    status_breakdown: dict[ExpedicaoStatus, int]
    recent_expedicoes: list[Expedicao] = field(default_factory=list)


def round_money(value: Decimal | float | int) -> Decimal:
    """Round half-up to two decimal places."""
    return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def occupancy_percentage(filled: int, total: int) -> int:
    """Whole-number percentage of filled addresses; 0 when there are none."""
    if total <= 0:
        return 0
    ratio = Decimal(filled * 100) / Decimal(total)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def total_weight(packages: Iterable[Package]) -> Decimal:
    return round_money(sum((Decimal(p.weight) for p in packages), Decimal(0)))


def average_weight(packages: Sequence[Package]) -> Decimal:
    if not packages:
        return round_money(0)
    raw = sum((Decimal(p.weight) for p in packages), Decimal(0)) / len(packages)
    return round_money(raw)


def days_in_transit(expedicao: Expedicao, now: datetime | None = None) -> int:
    """Whole days since the shipment was created; 0 while still being prepared."""
    if expedicao.status == ExpedicaoStatus.PREPARANDO or expedicao.created_at is None:
        return 0
    current = now or datetime.now(timezone.utc)
    return (current - expedicao.created_at) // timedelta(days=1)


def enderecamento_stats(
    packages: Sequence[Package],
    addresses: Sequence[Address],
    assignments: Sequence[Enderecamento],
    recent_limit: int = 5,
) -> EnderecamentoStats:
    filled = sum(1 for a in addresses if a.status == AddressStatus.FILLED)
    empty = sum(1 for a in addresses if a.status == AddressStatus.EMPTY)
    assigned = {a.package.id for a in assignments}
    unassigned = sum(1 for p in packages if p.id not in assigned)

    return EnderecamentoStats(
        total_enderecamentos=len(assignments),
        total_packages_assigned=len(assignments),
        total_packages_unassigned=unassigned,
        warehouse_occupancy_percentage=occupancy_percentage(filled, len(addresses)),
        addresses_occupied=filled,
        addresses_available=empty,
        total_addresses=len(addresses),
        recent_enderecamentos=list(assignments[:recent_limit]),
    )


def address_summary(addresses: Sequence[Address], recent_limit: int = 5) -> AddressSummary:
    """Counts by status, per-street breakdown and the newest addresses."""
    by_street: dict[int, StreetOccupancy] = {}
    for address in addresses:
        entry = by_street.setdefault(
            address.street.id,
            StreetOccupancy(street_id=address.street.id, street_name=address.street.name),
        )
        entry.total_addresses += 1
        if address.status == AddressStatus.EMPTY:
            entry.empty_addresses += 1
        else:
            entry.filled_addresses += 1

    empty = sum(s.empty_addresses for s in by_street.values())
    return AddressSummary(
        total_addresses=len(addresses),
        empty_addresses=empty,
        filled_addresses=len(addresses) - empty,
        addresses_by_street=list(by_street.values()),
        recent_addresses=most_recent(addresses, recent_limit),
    )


def package_stats(packages: Sequence[Package], recent_limit: int = 10) -> PackageStats:
    return PackageStats(
        total_packages=len(packages),
        total_weight=total_weight(packages),
        avg_weight=average_weight(packages),
        recent_packages=most_recent(packages, recent_limit),
    )


def take_up_stats(
    take_ups: Sequence[TakeUp], now: datetime | None = None, recent_limit: int = 5
) -> TakeUpStats:
    total_packages = sum(len(t.packages) for t in take_ups)
    average = Decimal(total_packages) / len(take_ups) if take_ups else Decimal(0)
    return TakeUpStats(
        total_take_ups=len(take_ups),
        total_packages=total_packages,
        new_take_ups_this_month=_created_this_month(take_ups, now),
        avg_packages_per_take_up=round_money(average),
        recent_take_ups=most_recent(take_ups, recent_limit),
    )


def customer_stats(
    customers: Sequence[Customer], now: datetime | None = None, recent_limit: int = 5
) -> CustomerStats:
    return CustomerStats(
        total_customers=len(customers),
        new_customers_this_month=_created_this_month(customers, now),
        recent_customers=most_recent(customers, recent_limit),
    )


def street_stats(streets: Sequence[Street], recent_limit: int = 5) -> StreetStats:
    return StreetStats(total_streets=len(streets), recent_streets=most_recent(streets, recent_limit))


def expedicao_stats(
    expedicoes: Sequence[Expedicao], now: datetime | None = None, recent_limit: int = 5
) -> ExpedicaoStats:
    """Shipment counters.

    "Shipped" means past ``Preparando``; "in progress" means ``Expedido``
    or ``Em Trânsito``.
    """
    current = now or datetime.now(timezone.utc)
    breakdown = {status: 0 for status in ExpedicaoStatus}
    for expedicao in expedicoes:
        breakdown[expedicao.status] += 1

    shipped = [e for e in expedicoes if e.status != ExpedicaoStatus.PREPARANDO]
    shipped_packages = [p for e in shipped for p in e.packages]
    transit_days = [days_in_transit(e, current) for e in shipped]
    average_days = Decimal(sum(transit_days)) / len(transit_days) if transit_days else Decimal(0)

    return ExpedicaoStats(
        total_expedicoes=len(expedicoes),
        total_packages_shipped=len(shipped_packages),
        expeditions_in_progress=breakdown[ExpedicaoStatus.EXPEDIDO] + breakdown[ExpedicaoStatus.EM_TRANSITO],
        expeditions_delivered=breakdown[ExpedicaoStatus.ENTREGUE],
        expeditions_overdue=sum(1 for e in expedicoes if is_overdue(e, current)),
        average_transit_days=round_money(average_days),
        total_weight_shipped=total_weight(shipped_packages),
        status_breakdown=breakdown,
        recent_expedicoes=most_recent(expedicoes, recent_limit),
    )


def most_recent(records: Iterable, limit: int) -> list:
    """Newest first by ``created_at``; records without one sort last."""
    oldest = datetime.min.replace(tzinfo=timezone.utc)
    ordered = sorted(records, key=lambda r: r.created_at or oldest, reverse=True)
    return ordered[:limit]


def _created_this_month(records: Iterable, now: datetime | None) -> int:
    current = now or datetime.now(timezone.utc)
    start = current.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return sum(1 for r in records if r.created_at is not None and r.created_at >= start)
