"""Shipment (expedição) models."""

from dataclasses import dataclass, field
from datetime import datetime

from warehouse.models.enums import ExpedicaoStatus
from warehouse.models.take_up import Package


@dataclass
class Expedicao:
    """Outbound shipment grouping packages with carrier and tracking info."""

    id: str
    code: str
    destination: str
    responsible: str
    carrier: str
    tracking: str
    status: ExpedicaoStatus
    packages: list[Package] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    expected_delivery: datetime | None = None
    actual_delivery: datetime | None = None
    notes: str | None = None


@dataclass
class ExpedicaoWithDetails(Expedicao):
    """Shipment with fields derived at read time for display."""

    days_in_transit: int = 0
    is_overdue: bool = False
    next_status: ExpedicaoStatus | None = None
    package_count: int = 0
    total_weight: float = 0.0
