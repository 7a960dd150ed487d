"""Faker-based sample data for demos, tests and seeding."""

from warehouse.generators.base import BaseGenerator
from warehouse.generators.documents import format_cnpj, generate_cnpj, is_valid_cnpj
from warehouse.generators.entities import (
    AddressGenerator,
    CustomerGenerator,
    ExpedicaoGenerator,
    PackageGenerator,
    StreetGenerator,
    TakeUpGenerator,
    street_letters,
)
from warehouse.generators.seed import SeedPlan, seed_store

__all__ = [
    "AddressGenerator",
    "BaseGenerator",
    "CustomerGenerator",
    "ExpedicaoGenerator",
    "PackageGenerator",
    "SeedPlan",
    "StreetGenerator",
    "TakeUpGenerator",
    "format_cnpj",
    "generate_cnpj",
    "is_valid_cnpj",
    "seed_store",
    "street_letters",
]
