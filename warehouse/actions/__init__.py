"""Server-side actions: validate form input, mutate the store, report back."""

from warehouse.actions.addresses import AddressActions
from warehouse.actions.base import CacheInvalidator, FormState, OperationResult, validate_form
from warehouse.actions.customers import CustomerActions
from warehouse.actions.enderecamento import EnderecamentoActions
from warehouse.actions.expedicao import ExpedicaoActions
from warehouse.actions.packages import PackageActions
from warehouse.actions.streets import StreetActions
from warehouse.actions.take_ups import TakeUpActions

__all__ = [
    "AddressActions",
    "CacheInvalidator",
    "CustomerActions",
    "EnderecamentoActions",
    "ExpedicaoActions",
    "FormState",
    "OperationResult",
    "PackageActions",
    "StreetActions",
    "TakeUpActions",
    "validate_form",
]
