"""Assignment matcher: rebuild package-to-address pairings at read time.

The backend stores no assignment table, only the address status. Each
read pairs every filled address, in backend order, with the first
package not yet matched in the same pass. The result is a
reconstruction, not a record of where a package was actually placed:
changing the iteration order or the tie-break changes which address
reports which package.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Mapping

from warehouse.models import Address, AddressStatus, Enderecamento, Package

UNKNOWN_CUSTOMER = "Cliente não identificado"


def assignment_id(address_id: str, package_id: str) -> str:
    """Synthetic assignment id, only meaningful within one read."""
    return f"END_{address_id}_{package_id}"


def address_code(address: Address) -> str:
    """Short label such as ``A-002`` for an address.

    The prefix is the first letter of the street name's second word
    ("Rua A" -> "A"), or ``X`` when there is none.
    """
    words = address.street.name.split(" ")
    prefix = words[1][:1].upper() if len(words) > 1 and words[1] else ""
    return f"{prefix or 'X'}-{address.number.rjust(3, '0')}"


def full_address(address: Address) -> str:
    """``"<street>, <number>"`` plus ``" - <complement>"`` when set."""
    text = f"{address.street.name}, {address.number}"
    if address.complement:
        text += f" - {address.complement}"
    return text


def compute_assignments(
    packages: Iterable[Package],
    addresses: Iterable[Address],
    customer_names: Mapping[str, str] | None = None,
    now: datetime | None = None,
) -> list[Enderecamento]:
    """Pair filled addresses with packages, greedily and in input order.

    Parameters
    ----------
    packages : Iterable[Package]
        All packages, in backend order.
    addresses : Iterable[Address]
        All addresses, in backend order.
    customer_names : Mapping[str, str] | None
        Optional ``take_up_id -> customer name`` lookup for display.
    now : datetime | None
        Timestamp stamped on the derived records.

    Returns
    -------
    list[Enderecamento]
        One entry per filled address that found a package, in address
        order. Filled addresses left over once packages run out are
        omitted; this never raises.
    """
    package_list = list(packages)
    names = customer_names or {}
    stamp = now or datetime.now(timezone.utc)

    matched: set[str] = set()
    assignments: list[Enderecamento] = []
    cursor = 0

    for address in addresses:
        if address.status != AddressStatus.FILLED:
            continue

        # Packages before the cursor are all matched, so scanning forward
        # finds the first unmatched one.
        while cursor < len(package_list) and package_list[cursor].id in matched:
            cursor += 1
        if cursor >= len(package_list):
            continue

        package = package_list[cursor]
        matched.add(package.id)
        assignments.append(
            Enderecamento(
                id=assignment_id(address.id, package.id),
                package=package,
                address=address,
                created_at=stamp,
                updated_at=stamp,
                address_code=address_code(address),
                street_name=address.street.name,
                full_address=full_address(address),
                customer_name=names.get(package.take_up_id, UNKNOWN_CUSTOMER),
                take_up_code=package.take_up_id[:8],
            )
        )

    return assignments


def find_assignment(assignments: Iterable[Enderecamento], address_id: str) -> Enderecamento | None:
    """Return the assignment held by an address, if any."""
    for assignment in assignments:
        if assignment.address.id == address_id:
            return assignment
    return None
