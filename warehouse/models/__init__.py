"""Domain models for the warehouse dashboard."""

from warehouse.models.base import Address, Street, StreetRef
from warehouse.models.customer import Customer
from warehouse.models.enderecamento import Enderecamento
from warehouse.models.enums import AddressStatus, ExpedicaoStatus
from warehouse.models.expedicao import Expedicao, ExpedicaoWithDetails
from warehouse.models.take_up import Package, TakeUp

__all__ = [
    "Address",
    "AddressStatus",
    "Customer",
    "Enderecamento",
    "Expedicao",
    "ExpedicaoStatus",
    "ExpedicaoWithDetails",
    "Package",
    "Street",
    "StreetRef",
    "TakeUp",
]
