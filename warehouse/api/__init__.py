"""Boundary layer between the dashboard and the REST backend."""

from warehouse.api.client import BackendClient
from warehouse.api.serialization import serialize_value, to_payload
from warehouse.api.transform import normalize_keys, normalize_records

__all__ = [
    "BackendClient",
    "normalize_keys",
    "normalize_records",
    "serialize_value",
    "to_payload",
]
