"""Key normalization and record decoding for backend responses.

The backend speaks snake_case, but some endpoints echo request bodies
in camelCase (``streetId``, ``takeUpId``). ``normalize_keys`` renames
top-level keys to snake_case; nested objects are decoded explicitly
by the ``decode_*`` functions.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from warehouse.models import (
    Address,
    AddressStatus,
    Customer,
    Expedicao,
    ExpedicaoStatus,
    Package,
    Street,
    StreetRef,
    TakeUp,
)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake(key: str) -> str:
    """Convert a camelCase key to snake_case."""
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def normalize_keys(record: dict[str, Any]) -> dict[str, Any]:
    """Rename top-level keys to snake_case. Values are left as-is."""
    return {to_snake(key): value for key, value in record.items()}


def normalize_records(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Apply ``normalize_keys`` to every record of a list response."""
    return [normalize_keys(record) for record in records]


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_decimal(value: Any) -> Decimal:
    """Parse a numeric field into ``Decimal`` (strings and floats accepted)."""
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid decimal value: {value!r}") from exc


def decode_street(record: dict[str, Any]) -> Street:
    data = normalize_keys(record)
    return Street(
        id=int(data["id"]),
        name=data["name"],
        created_at=parse_datetime(data.get("created_at")),
        updated_at=parse_datetime(data.get("updated_at")),
    )


def decode_address(record: dict[str, Any]) -> Address:
    data = normalize_keys(record)
    street = data.get("street") or {}
    street_id = street.get("id", data.get("street_id"))
    return Address(
        id=str(data["id"]),
        street=StreetRef(id=int(street_id), name=street.get("name", data.get("street_name", ""))),
        number=str(data.get("number", "")),
        complement=data.get("complement") or "",
        status=AddressStatus(data.get("status", AddressStatus.EMPTY.value)),
        created_at=parse_datetime(data.get("created_at")),
        updated_at=parse_datetime(data.get("updated_at")),
    )


def decode_customer(record: dict[str, Any]) -> Customer:
    data = normalize_keys(record)
    return Customer(
        id=str(data["id"]),
        name=data.get("name", ""),
        cnpj=data.get("cnpj", ""),
        created_at=parse_datetime(data.get("created_at")),
        updated_at=parse_datetime(data.get("updated_at")),
    )


def decode_package(record: dict[str, Any]) -> Package:
    data = normalize_keys(record)
    return Package(
        id=str(data["id"]),
        package_number=str(data.get("package_number", "")),
        lot=str(data.get("lot", "")),
        weight=parse_decimal(data.get("weight", 0)),
        take_up_id=str(data.get("take_up_id", "")),
        created_at=parse_datetime(data.get("created_at")),
        updated_at=parse_datetime(data.get("updated_at")),
    )


def decode_take_up(record: dict[str, Any]) -> TakeUp:
    """Decode a take-up; a bare ``customer_id`` yields a name-less customer."""
    data = normalize_keys(record)
    customer_data = data.get("customer")
    if customer_data:
        customer = decode_customer(customer_data)
    else:
        customer = Customer(id=str(data.get("customer_id", "")), name="", cnpj="")
    return TakeUp(
        id=str(data["id"]),
        customer=customer,
        packages=[decode_package(p) for p in data.get("packages") or []],
        created_at=parse_datetime(data.get("created_at")),
        updated_at=parse_datetime(data.get("updated_at")),
    )


def decode_expedicao(record: dict[str, Any]) -> Expedicao:
    data = normalize_keys(record)
    return Expedicao(
        id=str(data["id"]),
        code=data.get("code", ""),
        destination=data.get("destination", ""),
        responsible=data.get("responsible", ""),
        carrier=data.get("carrier", ""),
        tracking=data.get("tracking", ""),
        status=ExpedicaoStatus(data.get("status", ExpedicaoStatus.PREPARANDO.value)),
        packages=[decode_package(p) for p in data.get("packages") or []],
        created_at=parse_datetime(data.get("created_at")),
        updated_at=parse_datetime(data.get("updated_at")),
        expected_delivery=parse_datetime(data.get("expected_delivery")),
        actual_delivery=parse_datetime(data.get("actual_delivery")),
        notes=data.get("notes"),
    )
