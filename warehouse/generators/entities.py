"""Generators for warehouse entities."""

from __future__ import annotations

import random
import string
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Iterator

from warehouse.generators.base import BaseGenerator
from warehouse.generators.documents import format_cnpj, generate_cnpj
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


def _now() -> datetime:
    return datetime.now(timezone.utc)


def street_letters(index: int) -> str:
    """0 -> ``A``, 25 -> ``Z``, 26 -> ``AA``."""
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = string.ascii_uppercase[remainder] + letters
    return letters


class CustomerGenerator(BaseGenerator):
    """Generate companies with a valid, formatted CNPJ."""

    def generate(self) -> Customer:
        now = _now()
        return Customer(
            id=str(uuid.uuid4()),
            name=self.fake.company(),
            cnpj=format_cnpj(generate_cnpj()),
            created_at=now,
            updated_at=now,
        )

    def generate_batch(self, count: int) -> Iterator[Customer]:
        for _ in range(count):
            yield self.generate()


class StreetGenerator(BaseGenerator):
    """Generate streets named ``Rua A``, ``Rua B``, ..."""

    def generate_batch(self, count: int, start: int = 0) -> Iterator[Street]:
        now = _now()
        for index in range(start, start + count):
            yield Street(id=index + 1, name=f"Rua {street_letters(index)}", created_at=now, updated_at=now)


class AddressGenerator(BaseGenerator):
    """Generate numbered slots along a street."""

    COMPLEMENTS = ["", "", "", "Nível 1", "Nível 2", "Nível 3", "Prateleira A", "Prateleira B"]

    def generate_for_street(self, street: Street, count: int) -> Iterator[Address]:
        """Yield ``count`` empty addresses numbered from 1."""
        ref = StreetRef(id=street.id, name=street.name)
        for number in range(1, count + 1):
            now = _now()
            yield Address(
                id=str(uuid.uuid4()),
                street=ref,
                number=str(number),
                complement=random.choice(self.COMPLEMENTS),
                status=AddressStatus.EMPTY,
                created_at=now,
                updated_at=now,
            )


class TakeUpGenerator(BaseGenerator):
    def generate(self, customer: Customer) -> TakeUp:
        now = _now() - timedelta(days=random.randint(0, 60))
        return TakeUp(id=str(uuid.uuid4()), customer=customer, created_at=now, updated_at=now)


class PackageGenerator(BaseGenerator):
    """Generate packages with ``PKG-XXXXXX`` numbers and weights in kg."""

    MIN_WEIGHT = 0.5
    MAX_WEIGHT = 500.0

    def generate(self, take_up_id: str) -> Package:
        now = _now()
        weight = Decimal(str(random.uniform(self.MIN_WEIGHT, self.MAX_WEIGHT))).quantize(Decimal("0.01"))
        return Package(
            id=str(uuid.uuid4()),
            package_number=f"PKG-{random.randint(0, 999999):06d}",
            lot=f"LOTE-{self.fake.bothify('####-??').upper()}",
            weight=weight,
            take_up_id=take_up_id,
            created_at=now,
            updated_at=now,
        )

    def generate_batch(self, take_up_id: str, count: int) -> list[Package]:
        """Packages with distinct numbers within one take-up."""
        packages: list[Package] = []
        seen: set[str] = set()
        while len(packages) < count:
            package = self.generate(take_up_id)
            if package.package_number in seen:
                continue
            seen.add(package.package_number)
            packages.append(package)
        return packages


class ExpedicaoGenerator(BaseGenerator):
    """Generate shipments in ``Preparando`` for a set of packages."""

    CARRIERS = ["Correios", "Jadlog", "Total Express", "Azul Cargo", "Braspress", "Loggi"]

    def generate(self, packages: list[Package]) -> Expedicao:
        now = _now()
        return Expedicao(
            id=str(uuid.uuid4()),
            code=f"EXP-{random.randint(0, 99999):05d}",
            destination=f"{self.fake.city()}/{self.fake.estado_sigla()}",
            responsible=self.fake.name(),
            carrier=random.choice(self.CARRIERS),
            tracking=self.fake.bothify("??#########BR").upper(),
            status=ExpedicaoStatus.PREPARANDO,
            packages=list(packages),
            created_at=now,
            updated_at=now,
            expected_delivery=now + timedelta(days=random.randint(2, 15)),
        )
