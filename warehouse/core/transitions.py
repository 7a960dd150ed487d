"""Status transition rules for addresses and shipments.

Addresses toggle between ``empty`` and ``filled``; creating an
assignment fills an address and removing one empties it. Shipments
move forward one step at a time through ``SHIPMENT_FLOW``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

from warehouse.exceptions import ValidationError
from warehouse.models import (
    Address,
    AddressStatus,
    Expedicao,
    ExpedicaoStatus,
    Package,
)

ADDRESS_TRANSITIONS: dict[AddressStatus, AddressStatus] = {
    AddressStatus.EMPTY: AddressStatus.FILLED,
    AddressStatus.FILLED: AddressStatus.EMPTY,
}

SHIPMENT_FLOW: tuple[ExpedicaoStatus, ...] = (
    ExpedicaoStatus.PREPARANDO,
    ExpedicaoStatus.EXPEDIDO,
    ExpedicaoStatus.EM_TRANSITO,
    ExpedicaoStatus.ENTREGUE,
)


def next_address_status(current: AddressStatus) -> AddressStatus:
    return ADDRESS_TRANSITIONS[AddressStatus(current)]


def check_assignment(
    address_id: str,
    package_id: str,
    available_packages: Iterable[Package],
    available_addresses: Iterable[Address],
) -> Address:
    """Validate that a package can be placed at an address.

    The address is checked first, so repeating an assignment reports
    the now-filled address.

    Returns
    -------
    Address
        The empty address that will be filled.

    Raises
    ------
    ValidationError
        On ``addressId`` when the address is unknown or already
        filled, on ``packageId`` when the package is unknown or
        already assigned.
    """
    address = next((a for a in available_addresses if a.id == address_id), None)
    if address is None:
        raise ValidationError("addressId", "Endereço não encontrado ou já ocupado")

    if not any(package.id == package_id for package in available_packages):
        raise ValidationError("packageId", "Pacote não encontrado ou já endereçado")
    return address


def check_release(address_id: str, addresses: Iterable[Address]) -> Address:
    """Validate that an address currently holds a package."""
    address = next((a for a in addresses if a.id == address_id), None)
    if address is None:
        raise ValidationError("addressId", "Endereço não encontrado")
    if address.status != AddressStatus.FILLED:
        raise ValidationError("addressId", "Endereço não está ocupado")
    return address


def get_next_status(current: ExpedicaoStatus) -> ExpedicaoStatus | None:
    """Next shipment status, or ``None`` once delivered."""
    index = SHIPMENT_FLOW.index(ExpedicaoStatus(current))
    if index + 1 >= len(SHIPMENT_FLOW):
        return None
    return SHIPMENT_FLOW[index + 1]


def check_shipment_transition(current: ExpedicaoStatus, new: ExpedicaoStatus) -> ExpedicaoStatus:
    """Accept ``new`` only when it is the step right after ``current``."""
    expected = get_next_status(current)
    if expected is None:
        raise ValidationError("status", "Expedição já foi entregue")
    if ExpedicaoStatus(new) != expected:
        raise ValidationError(
            "status",
            f'Transição inválida: de "{ExpedicaoStatus(current).value}" só é possível ir para "{expected.value}"',
        )
    return expected


def status_update_payload(
    new_status: ExpedicaoStatus,
    notes: str | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Changes to send for a status update.

    Only the move to ``Entregue`` stamps ``actual_delivery``.
    """
    changes: dict[str, Any] = {"status": ExpedicaoStatus(new_status)}
    if notes:
        changes["notes"] = notes
    if new_status == ExpedicaoStatus.ENTREGUE:
        changes["actual_delivery"] = now or datetime.now(timezone.utc)
    return changes


def is_overdue(expedicao: Expedicao, now: datetime | None = None) -> bool:
    """Expected delivery has passed and the shipment is not delivered."""
    if expedicao.expected_delivery is None:
        return False
    current = now or datetime.now(timezone.utc)
    return current > expedicao.expected_delivery and expedicao.status != ExpedicaoStatus.ENTREGUE
