"""Derived-state logic: assignment matching, availability, status rules and stats."""

from warehouse.core.availability import (
    available_addresses,
    available_packages,
    packages_for_shipping,
)
from warehouse.core.listing import Page, matches_query, paginate, sort_records
from warehouse.core.matcher import (
    UNKNOWN_CUSTOMER,
    address_code,
    assignment_id,
    compute_assignments,
    find_assignment,
    full_address,
)
from warehouse.core.stats import (
    AddressSummary,
    CustomerStats,
    EnderecamentoStats,
    ExpedicaoStats,
    PackageStats,
    StreetOccupancy,
    StreetStats,
    TakeUpStats,
    address_summary,
    average_weight,
    customer_stats,
    days_in_transit,
    enderecamento_stats,
    expedicao_stats,
    most_recent,
    occupancy_percentage,
    package_stats,
    round_money,
    street_stats,
    take_up_stats,
    total_weight,
)
from warehouse.core.transitions import (
    SHIPMENT_FLOW,
    check_assignment,
    check_release,
    check_shipment_transition,
    get_next_status,
    is_overdue,
    next_address_status,
    status_update_payload,
)

__all__ = [
    "SHIPMENT_FLOW",
    "UNKNOWN_CUSTOMER",
    "AddressSummary",
    "CustomerStats",
    "EnderecamentoStats",
    "ExpedicaoStats",
    "PackageStats",
    "Page",
    "StreetOccupancy",
    "StreetStats",
    "TakeUpStats",
    "address_code",
    "address_summary",
    "assignment_id",
    "available_addresses",
    "available_packages",
    "average_weight",
    "check_assignment",
    "check_release",
    "check_shipment_transition",
    "compute_assignments",
    "customer_stats",
    "days_in_transit",
    "enderecamento_stats",
    "expedicao_stats",
    "find_assignment",
    "full_address",
    "get_next_status",
    "is_overdue",
    "matches_query",
    "most_recent",
    "next_address_status",
    "occupancy_percentage",
    "package_stats",
    "packages_for_shipping",
    "paginate",
    "round_money",
    "sort_records",
    "status_update_payload",
    "street_stats",
    "take_up_stats",
    "total_weight",
]
